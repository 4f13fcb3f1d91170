"""RGB colours with floating-point channels."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _channel_byte(value: float, exposure: float) -> int:
    exponent = value * exposure
    if exponent >= 0.0:
        # 1 - exp(x) is not positive here, so the channel saturates to black.
        return 0
    level = min(1.0 - math.exp(exponent), 1.0)
    return max(0, min(255, int(255 * level)))


@dataclass(frozen=True)
class Colour:
    """A colour of red, green and blue channels.

    ``+`` adds channel-wise, ``*`` multiplies channel-wise by another colour
    or scales every channel by a number.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def from_pixel(cls, value: int) -> Colour:
        """Build a colour from a pixel packed as 0x00BBGGRR."""
        return cls(
            (value & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            ((value >> 16) & 0xFF) / 255.0,
        )

    def to_pixel(self, exposure: float) -> int:
        """Pack the exposed colour into a 0x00BBGGRR pixel."""
        return (
            (_channel_byte(self.blue, exposure) << 16)
            + (_channel_byte(self.green, exposure) << 8)
            + _channel_byte(self.red, exposure)
        )

    def __add__(self, other: Colour) -> Colour:
        if not isinstance(other, Colour):
            return NotImplemented
        return Colour(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: Colour | float) -> Colour:
        if isinstance(other, Colour):
            return Colour(self.red * other.red, self.green * other.green, self.blue * other.blue)
        if isinstance(other, (int, float)):
            return Colour(self.red * other, self.green * other, self.blue * other)
        return NotImplemented

    def __rmul__(self, factor: float) -> Colour:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Colour(self.red * factor, self.green * factor, self.blue * factor)