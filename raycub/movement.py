"""Player movement with wall collision, turning and doors."""

from __future__ import annotations

import math
from typing import MutableSequence, Sequence

from .mapgrid import DOOR_CLOSED, DOOR_OPEN
from .raycast import ANGLE, GRID_PIX, PLAYER_S, Player, deg_to_rad, fix_angle

Grid = Sequence[Sequence[str]]
MutableGrid = MutableSequence[MutableSequence[str]]

WALL = "1"


def _at(grid: Grid, row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _blocked_diagonal(grid: Grid, side: tuple[int, int], front: tuple[int, int]) -> bool:
    side_cell = _at(grid, *side)
    front_cell = _at(grid, *front)
    if not side_cell or not front_cell:
        return True
    return side_cell == WALL and front_cell == WALL


def _side_wall_free(grid: Grid, next_x: float, next_y: float, degree: float) -> bool:
    """Tell whether no pair of walls closes the diagonal the player heads into."""
    col, row = int(next_x), int(next_y)
    if 0 <= degree < 90:
        if _blocked_diagonal(grid, (row, col - 1), (row + 1, col)):
            return False
    if 90 <= degree < 180:
        if _blocked_diagonal(grid, (row, col + 1), (row + 1, col)):
            return False
    elif 180 <= degree < 270:
        if _blocked_diagonal(grid, (row, col + 1), (row - 1, col)):
            return False
    elif 270 <= degree < 360:
        if _blocked_diagonal(grid, (row, col - 1), (row - 1, col)):
            return False
    return True


def _touches(grid: Grid, next_x: float, next_y: float, char: str) -> bool:
    col, row = int(next_x), int(next_y)
    return (
        _at(grid, int(next_y + 0.1), col) == char
        or _at(grid, int(next_y - 0.1), col) == char
        or _at(grid, row, int(next_x + 0.1)) == char
        or _at(grid, row, int(next_x - 0.1)) == char
    )


def movable(grid: Grid, player: Player, x: float, y: float, doors: bool = False) -> bool:
    """Tell whether the player may step to the pixel position ``(x, y)``."""
    current_x = player.x / GRID_PIX
    current_y = player.y / GRID_PIX
    next_x = x / GRID_PIX
    next_y = y / GRID_PIX
    if _at(grid, int(next_y), int(next_x)):
        if _touches(grid, next_x, next_y, WALL):
            return False
        if doors and _touches(grid, next_x, next_y, DOOR_CLOSED):
            return False
    if _trunc_div(int(current_y), GRID_PIX) == _trunc_div(
        int(next_y), GRID_PIX
    ) and _trunc_div(int(current_x), GRID_PIX) == _trunc_div(int(next_x), GRID_PIX):
        return True
    return _side_wall_free(grid, next_x, next_y, fix_angle(player.angle))


def _try_move(grid: Grid, player: Player, x: float, y: float, doors: bool) -> bool:
    if movable(grid, player, x, y, doors):
        player.x = x
        player.y = y
        return True
    return False


def move_sideways(grid: Grid, player: Player, direction: str, doors: bool = False) -> bool:
    """Strafe ``"left"`` or ``"right"``; return whether the player moved."""
    if direction == "left":
        angle = fix_angle(player.angle + 90)
    elif direction == "right":
        angle = fix_angle(player.angle - 90)
    else:
        raise ValueError(f"unknown direction: {direction!r}")
    radians = deg_to_rad(angle)
    x = player.x + math.cos(radians) * PLAYER_S
    y = player.y - math.sin(radians) * PLAYER_S
    return _try_move(grid, player, x, y, doors)


def move_front_back(grid: Grid, player: Player, direction: str, doors: bool = False) -> bool:
    """Step ``"up"`` or ``"down"`` along the movement vector."""
    if direction == "up":
        x, y = player.x + player.dx, player.y + player.dy
    elif direction == "down":
        x, y = player.x - player.dx, player.y - player.dy
    else:
        raise ValueError(f"unknown direction: {direction!r}")
    return _try_move(grid, player, x, y, doors)


def turn(player: Player, direction: str) -> None:
    """Turn the view ``"left"`` or ``"right"`` by a fixed step."""
    if direction == "left":
        player.angle = fix_angle(player.angle + ANGLE)
    elif direction == "right":
        player.angle = fix_angle(player.angle - ANGLE)
    else:
        raise ValueError(f"unknown direction: {direction!r}")
    player.set_step(PLAYER_S)


def _toggle_door(grid: MutableGrid, player: Player, source: str, target: str) -> bool:
    col = _trunc_div(int(player.x), GRID_PIX)
    row = _trunc_div(int(player.y), GRID_PIX)
    for r, c in ((row, col), (row, col - 1), (row, col + 1), (row - 1, col), (row + 1, col)):
        if _at(grid, r, c) == source:
            grid[r][c] = target
            return True
    return False


def open_door(grid: MutableGrid, player: Player) -> bool:
    """Open a closed door on or next to the player's cell."""
    return _toggle_door(grid, player, DOOR_CLOSED, DOOR_OPEN)


def close_door(grid: MutableGrid, player: Player) -> bool:
    """Close an open door on or next to the player's cell."""
    return _toggle_door(grid, player, DOOR_OPEN, DOOR_CLOSED)