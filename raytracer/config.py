"""Parser and typed accessors for the brace-structured scene description format.

A file is a sequence of named sections::

    Scene
    {
        Exposure = 1.5;   // comments run to the end of the line
        Camera.Position = 0.0, 1.0, -10.0;
    }

All whitespace is insignificant and is removed before parsing.
"""

from __future__ import annotations

import re
from typing import Mapping

from raytracer.colour import Colour
from raytracer.objects import Triangle
from raytracer.vectors import Vector

_WHITESPACE = str.maketrans("", "", " \t\n\r")
_NAME_END = re.compile(r"[{}=]")
_VALUE_END = re.compile(r"[{};]")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ConfigError(ValueError):
    """Raised when a configuration is malformed or a section is missing."""


def _strip(text: str) -> str:
    """Drop '//' comments and every space, tab and line break."""
    return "".join(line.split("//", 1)[0].translate(_WHITESPACE) for line in text.split("\n"))


def _parse_section_body(
    stream: str, pos: int, section: str, variables: dict[str, str]
) -> int:
    """Read a section starting at its opening brace; return the position after it closes."""
    depth = 0
    name = ""
    while True:
        if pos >= len(stream):
            raise ConfigError(f"section {section!r} is not closed")
        char = stream[pos]
        if char == "{":
            depth += 1
            pos += 1
            continue
        if char == "}":
            depth -= 1
            pos += 1
            if depth == 0:
                return pos
            continue

        # A variable name runs up to '=', or to a brace opening a nested block
        # (whose name is then carried into the next variable's name).
        match = _NAME_END.search(stream, pos)
        if match is None:
            raise ConfigError(f"unexpected end of input in section {section!r}")
        name += stream[pos : match.start()]
        pos = match.start()
        if match.group() == "{":
            continue
        if match.group() == "}":
            raise ConfigError(f"variable {name!r} in section {section!r} has no value")
        if not name:
            raise ConfigError(f"variable without a name in section {section!r}")
        pos += 1

        match = _VALUE_END.search(stream, pos)
        if match is None:
            raise ConfigError(f"variable {name!r} in section {section!r} is not terminated")
        if match.group() != ";":
            raise ConfigError(f"unexpected brace in the value of {name!r}")
        value = stream[pos : match.start()]
        if not value:
            raise ConfigError(f"variable {name!r} in section {section!r} has an empty value")
        # The first definition of a variable wins.
        variables.setdefault(f"{section}/{name}", value)
        name = ""
        pos = match.end()


def parse_config(text: str) -> tuple[dict[str, str], frozenset[str]]:
    """Parse configuration text.

    Returns the variables, keyed as ``"section/name"``, and the set of
    section names. Raises ConfigError on malformed input or a repeated section.
    """
    stream = _strip(text)
    variables: dict[str, str] = {}
    sections: set[str] = set()
    pos = 0
    name_start = 0
    while pos < len(stream):
        if stream[pos] != "{":
            pos += 1
            continue
        section = stream[name_start:pos]
        if section in sections:
            raise ConfigError(f"duplicate section {section!r}")
        sections.add(section)
        pos = _parse_section_body(stream, pos, section, variables)
        name_start = pos
    return variables, frozenset(sections)


def _leading_integer(text: str) -> int:
    match = _INTEGER_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _leading_float(text: str) -> tuple[float, int] | None:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(1)), match.end()


def _scan_floats(text: str, count: int) -> list[float] | None:
    """Read ``count`` comma-separated numbers from the start of ``text``."""
    numbers: list[float] = []
    pos = 0
    for index in range(count):
        if index:
            if not text.startswith(",", pos):
                return None
            pos += 1
        parsed = _leading_float(text[pos:])
        if parsed is None:
            return None
        value, consumed = parsed
        numbers.append(value)
        pos += consumed
    return numbers


class Config:
    """Parsed configuration with a current section for name lookups."""

    def __init__(self, variables: Mapping[str, str], sections: frozenset[str] | set[str]) -> None:
        self.variables = dict(variables)
        self.sections = frozenset(sections)
        self.section = ""

    @classmethod
    def from_text(cls, text: str) -> Config:
        """Parse configuration text into a Config."""
        return cls(*parse_config(text))

    def set_section(self, name: str) -> None:
        """Make ``name`` the section that lookups refer to.

        Raises ConfigError when there is no such section; no section is
        current afterwards.
        """
        if name not in self.sections:
            self.section = ""
            raise ConfigError(f"no section named {name!r}")
        self.section = name

    def _lookup(self, name: str) -> str | None:
        prefix = f"{self.section}/" if self.section else ""
        return self.variables.get(prefix + name)

    def get_boolean(self, name: str, default: bool) -> bool:
        """True only when the value is exactly ``true``."""
        value = self._lookup(name)
        return default if value is None else value == "true"

    def get_float(self, name: str, default: float) -> float:
        """The leading number of the value, 0.0 when it has none."""
        value = self._lookup(name)
        if value is None:
            return default
        parsed = _leading_float(value)
        return parsed[0] if parsed else 0.0

    def get_string(self, name: str, default: str) -> str:
        """The raw value."""
        value = self._lookup(name)
        return default if value is None else value

    def get_integer(self, name: str, default: int) -> int:
        """The leading integer of the value, 0 when it has none."""
        value = self._lookup(name)
        return default if value is None else _leading_integer(value)

    def get_vector(self, name: str, default: Vector) -> Vector:
        """A value of three comma-separated numbers; ``default`` if it is not one."""
        value = self._lookup(name)
        if value is None:
            return default
        numbers = _scan_floats(value, 3)
        return default if numbers is None else Vector(*numbers)

    def get_triangle(self, name: str, default: Triangle) -> Triangle:
        """A value of nine numbers giving three corners; normal and material are left unset."""
        value = self._lookup(name)
        if value is None:
            return default
        numbers = _scan_floats(value, 9)
        if numbers is None:
            return default
        return Triangle(
            p1=Vector(*numbers[0:3]),
            p2=Vector(*numbers[3:6]),
            p3=Vector(*numbers[6:9]),
        )

    def get_float_or_colour(self, name: str, default: float) -> Colour:
        """A colour given either as three numbers or as one number for every channel."""
        scalar = self.get_float(name, default)
        vector = self.get_vector(name, Vector(scalar, scalar, scalar))
        return Colour(vector.x, vector.y, vector.z)