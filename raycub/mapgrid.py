"""Parsing and structural checks of the map part of a scene."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

PLAYER_CHARS = "NSEW"
MAP_CHARS = "10\nNSEW "
DOOR_CLOSED = "D"
DOOR_OPEN = "O"
PAD_CHAR = "X"


class MapError(ValueError):
    """Raised when the map of a scene is invalid."""


@dataclass
class GameMap:
    """A validated map: its rows, size and the player's start."""

    rows: list[str]
    width: int
    height: int
    player_row: int
    player_col: int
    player_view: str
    grid: list[list[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.grid = [list(row) for row in pad_rows(self.rows, self.width)]


def last_index(text: str, char: str) -> int:
    """Return the index of the last ``char`` in ``text``, or -1."""
    return text.rfind(char)


def is_map_character(char: str, doors: bool = False) -> bool:
    """Tell whether ``char`` may appear in a map."""
    if doors and char == DOOR_CLOSED:
        return True
    return len(char) == 1 and char in MAP_CHARS


def check_consecutive_newlines(map_str: Optional[str]) -> None:
    """Reject a missing map or one with an empty line inside it."""
    if map_str is None:
        raise MapError("Map is null")
    if "\n\n" in map_str:
        raise MapError("Two consecutive new lines!")


def has_single_player(map_str: str) -> bool:
    """Tell whether the map holds exactly one player start."""
    return sum(1 for char in map_str if char in PLAYER_CHARS) == 1


def map_height(map_str: str) -> int:
    """Return the number of lines in the map text."""
    return map_str.count("\n") + 1


def pad_row(row: str, width: int) -> str:
    """Pad a row on the right with ``X`` up to ``width``."""
    return row.ljust(width, PAD_CHAR)


def pad_rows(rows: list[str], width: int) -> list[str]:
    """Pad every row to ``width``."""
    return [pad_row(row, width) for row in rows]


def find_player(rows: list[str]) -> Optional[tuple[int, int, str]]:
    """Return ``(row, column, view)`` of the last player start, or None."""
    found = None
    for row_index, row in enumerate(rows):
        for col_index, char in enumerate(row):
            if char in PLAYER_CHARS:
                found = (row_index, col_index, char)
    return found


def flood_fill(grid: list[list[str]], x: int, y: int, char: str) -> None:
    """Replace the 4-connected region of ``char`` at ``(x, y)`` with the next character."""
    replacement = chr(ord(char) + 1)
    stack = [(x, y)]
    while stack:
        row, col = stack.pop()
        if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
            continue
        if grid[row][col] != char:
            continue
        grid[row][col] = replacement
        stack.extend(
            ((row + 1, col), (row, col + 1), (row - 1, col), (row, col - 1))
        )


def has_second_map(rows: list[str], player_row: int) -> bool:
    """Tell whether walls exist that are not joined to the player's map.

    The wall reached first from the left on the player's row is flood
    filled; any ``1`` right of the last filled cell of a row is foreign.
    """
    width = max((len(row) for row in rows), default=0)
    grid = [list(row) for row in pad_rows(rows, width)]
    start_row = grid[player_row]
    col = 0
    while col < len(start_row) and start_row[col] == " ":
        col += 1
    if col >= len(start_row) or start_row[col] != "1":
        raise MapError("Map is not closed")
    flood_fill(grid, player_row, col, "1")
    for row in grid:
        text = "".join(row)
        start = max(last_index(text, "2"), 0)
        if "1" in text[start:]:
            return True
    return False


def parse_map(map_str: Optional[str], doors: bool = False) -> GameMap:
    """Validate the map text and build a :class:`GameMap`."""
    check_consecutive_newlines(map_str)
    assert map_str is not None
    if not all(is_map_character(char, doors) for char in map_str):
        raise MapError("Map has invalid character!")
    if not has_single_player(map_str):
        raise MapError("No player or more than one player!")
    height = map_height(map_str)
    rows = [row for row in map_str.split("\n") if row][:height]
    width = max((len(row) for row in rows), default=0)
    player = find_player(rows)
    if player is None:
        raise MapError("No player or more than one player!")
    player_row, player_col, view = player
    if has_second_map(rows, player_row):
        raise MapError("There are more than one map in the file!")
    return GameMap(
        rows=rows,
        width=width,
        height=height,
        player_row=player_row,
        player_col=player_col,
        player_view=view,
    )