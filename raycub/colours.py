"""Packing of RGB colour values."""

from __future__ import annotations

_WHITESPACE = " \t\n\v\f\r"


def _atoi(text: str) -> int:
    """Read a leading integer the way C ``atoi`` does; 0 if there is none."""
    text = text.lstrip(_WHITESPACE)
    sign = 1
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isascii() or not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def rgb(red: int, green: int, blue: int) -> int:
    """Pack three channels into a ``0xRRGGBB`` integer."""
    return ((red & 0xFF) << 16) + ((green & 0xFF) << 8) + (blue & 0xFF)


def change_colour(colour: str) -> int:
    """Convert an ``R,G,B`` string into a packed colour."""
    parts = [piece for piece in colour.split(",") if piece]
    if len(parts) < 3:
        raise ValueError(f"colour needs three components: {colour!r}")
    red, green, blue = (_atoi(part) for part in parts[:3])
    return rgb(red, green, blue)