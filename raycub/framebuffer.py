"""In-memory images: the frame being drawn and the wall textures."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Union

from .raycast import RED, WIN_SIZE_X, WIN_SIZE_Y

_CHANNELS = 3


def _colour_bytes(color: int) -> bytes:
    color &= 0xFFFFFF
    return bytes(((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF))


@dataclass
class FrameBuffer:
    """A fixed-size RGB image that silently ignores writes outside it."""

    width: int = WIN_SIZE_X
    height: int = WIN_SIZE_Y
    _data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame size must be positive")
        self._data = bytearray(self.width * self.height * _CHANNELS)

    def _offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * _CHANNELS

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points outside the frame are ignored."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            return
        offset = self._offset(x, y)
        self._data[offset:offset + _CHANNELS] = _colour_bytes(color)

    def get(self, x: int, y: int) -> int:
        """Return the packed colour of one pixel."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        offset = self._offset(x, y)
        red, green, blue = self._data[offset:offset + _CHANNELS]
        return (red << 16) | (green << 8) | blue

    def fill_rows(self, start: int, stop: int, color: int) -> None:
        """Paint the rows ``start`` up to ``stop`` (exclusive) in one colour."""
        start = max(int(start), 0)
        stop = min(int(stop), self.height)
        if start >= stop:
            return
        begin = self._offset(0, start)
        end = self._offset(0, stop)
        self._data[begin:end] = _colour_bytes(color) * (self.width * (stop - start))

    def to_bytes(self) -> bytes:
        """Return the pixels as packed RGB bytes, row by row."""
        return bytes(self._data)


@dataclass
class Texture:
    """A wall texture held as packed ``0xRRGGBB`` pixels, row by row."""

    width: int
    height: int
    pixels: list[int]

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match texture size")

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at ``(x, y)``, or red outside the texture."""
        x, y = int(x), int(y)
        if x >= self.width or x < 0 or y >= self.height or y < 0:
            return RED
        return self.pixels[y * self.width + x]

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "Texture":
        """Load a texture from an image file such as an XPM."""
        from PIL import Image

        with Image.open(os.fspath(path)) as image:
            rgb_image = image.convert("RGB")
            width, height = rgb_image.size
            raw = rgb_image.tobytes()
        pixels = [
            (raw[i] << 16) | (raw[i + 1] << 8) | raw[i + 2]
            for i in range(0, len(raw), _CHANNELS)
        ]
        return cls(width=width, height=height, pixels=pixels)