"""Reading and validating ``.cub`` scene descriptions."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

ELEMENT_COUNT = 6
TEXTURE_IDS = ("NO", "SO", "WE", "EA")
COLOUR_IDS = ("F", "C")

_ATTRIBUTES = {
    "NO": "no",
    "SO": "so",
    "WE": "we",
    "EA": "ea",
    "F": "floor",
    "C": "ceiling",
}


class CubFileError(ValueError):
    """Raised when a scene file or one of its elements is invalid."""


@dataclass
class Scene:
    """The elements and raw map text read from a scene file."""

    no: Optional[str] = None
    so: Optional[str] = None
    we: Optional[str] = None
    ea: Optional[str] = None
    floor: Optional[str] = None
    ceiling: Optional[str] = None
    map_str: Optional[str] = None
    element_count: int = 0

    def describe(self) -> str:
        """Return a human-readable summary of the scene."""
        border = "*" * 29
        lines = [border]
        for label, value in (
            ("no", self.no),
            ("so", self.so),
            ("we", self.we),
            ("ea", self.ea),
            ("floor", self.floor),
            ("ceiling", self.ceiling),
        ):
            if value is not None:
                lines.append(f"{label} = {value}")
        if self.map_str is not None:
            lines.append(f"map =\n{self.map_str}")
        lines.append(border)
        return "\n".join(lines)


def _split(text: str, separator: str) -> list[str]:
    """Split on a separator, dropping empty pieces."""
    return [piece for piece in text.split(separator) if piece]


def valid_file_name(file_name: str) -> bool:
    """Tell whether the first ``.cub`` in the name is its ending."""
    index = file_name.find(".cub")
    return index != -1 and len(file_name) - index == 4


def is_map_line(line: Optional[str]) -> bool:
    """Tell whether a line belongs to the map: its first non-blank is a digit."""
    if not line:
        return False
    stripped = line.lstrip(" \t")
    return bool(stripped) and stripped[0] in string.digits


def all_digits(number: str) -> bool:
    """Tell whether every character is an ASCII digit."""
    return all(char in string.digits for char in number)


def check_commas(rgb_values: str) -> None:
    """Reject leading, trailing or doubled commas in a colour value."""
    if (
        rgb_values.startswith(",")
        or rgb_values.endswith(",")
        or ",," in rgb_values
    ):
        raise CubFileError("Invalid rgb values!")


def check_colors(element: str) -> tuple[int, int, int]:
    """Validate a ``R,G,B`` colour and return its three components."""
    check_commas(element)
    parts = _split(element, ",")
    values = []
    for part in parts:
        if len(parts) != 3 or part.startswith("\n") or not all_digits(part):
            raise CubFileError("Invalid colors for ceiling or floor!")
        value = int(part)
        if value > 255:
            raise CubFileError("Invalid RGB value!")
        values.append(value)
    if len(values) != 3:
        raise CubFileError("Invalid colors for ceiling or floor!")
    return values[0], values[1], values[2]


def check_texture(element: str) -> str:
    """Validate a texture path: it must end in ``.xpm`` and be readable."""
    index = element.find(".xpm")
    if index == -1 or len(element) - index != 4:
        raise CubFileError("Invalid wall texture files!")
    try:
        with open(element, "rb"):
            pass
    except OSError as exc:
        raise CubFileError("Invalid wall texture files!") from exc
    return element


def _join_colour_parts(parts: list[str]) -> list[str]:
    """Join a colour written with spaces, such as ``F 25, 25, 25``."""
    for piece in parts:
        if piece == "," or (
            piece.startswith(",") and len(piece) > 1 and piece[1] in string.digits
        ):
            raise CubFileError("Invalid RGB value!")
    if len(parts) > 4:
        raise CubFileError("Invalid RGB value!")
    return [parts[0], "".join(parts[1:])]


def parse_element(line: str, scene: Scene) -> Scene:
    """Validate one element line and record it in the scene."""
    parts = _split(line.strip(" \t\n"), " ")
    if not parts:
        raise CubFileError("Invalid element!")
    if len(parts) > 2 and parts[0] in COLOUR_IDS:
        parts = _join_colour_parts(parts)
    identifier = parts[0]
    if identifier not in _ATTRIBUTES or len(parts) < 2:
        raise CubFileError("Invalid element!")
    value = parts[1]
    if identifier in TEXTURE_IDS:
        check_texture(value)
    else:
        check_colors(value)
    attribute = _ATTRIBUTES[identifier]
    if getattr(scene, attribute) is not None:
        raise CubFileError("Texture file duplicates!")
    setattr(scene, attribute, value)
    scene.element_count += 1
    return scene


def _read_map(lines: Iterator[str]) -> str:
    chunks = []
    for line in lines:
        if not is_map_line(line) and line != "\n":
            raise CubFileError("Duplicate elements or map is opened")
        chunks.append(line)
    map_str = "".join(chunks).strip("\n").rstrip(" \n")
    if not map_str:
        raise CubFileError("No map in file!")
    return map_str


def parse_scene(lines: Union[str, Iterable[str]]) -> Scene:
    """Parse the six elements and the map from the lines of a scene file."""
    if isinstance(lines, str):
        lines = lines.splitlines(keepends=True)
    stream = iter(lines)
    scene = Scene()
    while scene.element_count != ELEMENT_COUNT:
        line = next(stream, None)
        if line is None:
            raise CubFileError("Invalid file!")
        if is_map_line(line):
            raise CubFileError(
                "File does not have required elements or "
                "elements are in wrong order!"
            )
        if line != "\n":
            parse_element(line, scene)
    scene.map_str = _read_map(stream)
    return scene


def load_scene(path: Union[str, os.PathLike]) -> Scene:
    """Read and validate a ``.cub`` file."""
    file_name = os.fspath(path)
    if not valid_file_name(file_name):
        raise CubFileError("Invalid file")
    try:
        with open(file_name, encoding="utf-8") as handle:
            return parse_scene(handle)
    except OSError as exc:
        raise CubFileError("Invalid file") from exc