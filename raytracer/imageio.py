"""Writing rendered pixel buffers as uncompressed BMP and TGA images.

Pixels are integers packed as 0x00BBGGRR; each is stored as three bytes in
the order (bits 16-23, bits 8-15, bits 0-7). Rows are written top to bottom
as they appear in the buffer, with no row padding.
"""

from __future__ import annotations

import os
import struct
from typing import Sequence

_BMP_HEADER_SIZE = 54
_BMP_INFO_SIZE = 40
_BMP_PIXELS_PER_METRE = 2835
_BITS_PER_PIXEL = 24
_TGA_UNCOMPRESSED_RGB = 2

_BMP_HEADER = struct.Struct("<2sIHHIIIIHHIIIIII")
_TGA_HEADER = struct.Struct("<BBBHHBHHHHBB")


def _pixel_data(pixels: Sequence[int], width: int, height: int, stride: int) -> bytes:
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    if width and height:
        needed = (height - 1) * stride + width
        if len(pixels) < needed:
            raise ValueError(f"pixel buffer holds {len(pixels)} values, {needed} needed")
    out = bytearray()
    for y in range(height):
        for value in pixels[y * stride : y * stride + width]:
            out += bytes(((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF))
    return bytes(out)


def encode_bmp(pixels: Sequence[int], width: int, height: int, stride: int) -> bytes:
    """Encode a pixel buffer as a 24-bit BMP file."""
    body = _pixel_data(pixels, width, height, stride)
    image_size = width * height * 3
    header = _BMP_HEADER.pack(
        b"BM",
        (_BMP_HEADER_SIZE + image_size) & 0xFFFFFFFF,
        0,
        0,
        _BMP_HEADER_SIZE,
        _BMP_INFO_SIZE,
        width & 0xFFFFFFFF,
        height & 0xFFFFFFFF,
        1,
        _BITS_PER_PIXEL,
        0,
        image_size & 0xFFFFFFFF,
        _BMP_PIXELS_PER_METRE,
        _BMP_PIXELS_PER_METRE,
        0,
        0,
    )
    return header + body


def encode_tga(pixels: Sequence[int], width: int, height: int, stride: int) -> bytes:
    """Encode a pixel buffer as an uncompressed 24-bit TGA file."""
    body = _pixel_data(pixels, width, height, stride)
    header = _TGA_HEADER.pack(
        0,
        0,
        _TGA_UNCOMPRESSED_RGB,
        0,
        0,
        0,
        0,
        0,
        width & 0xFFFF,
        height & 0xFFFF,
        _BITS_PER_PIXEL,
        0,
    )
    return header + body


def write_bmp(
    path: str | os.PathLike[str], pixels: Sequence[int], width: int, height: int, stride: int
) -> None:
    """Write a pixel buffer to ``path`` as a BMP file."""
    data = encode_bmp(pixels, width, height, stride)
    with open(path, "wb") as stream:
        stream.write(data)


def write_tga(
    path: str | os.PathLike[str], pixels: Sequence[int], width: int, height: int, stride: int
) -> None:
    """Write a pixel buffer to ``path`` as a TGA file."""
    data = encode_tga(pixels, width, height, stride)
    with open(path, "wb") as stream:
        stream.write(data)