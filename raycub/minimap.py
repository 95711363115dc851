"""The top-left minimap: tiles, grid, player marker and view rays."""

from __future__ import annotations

import math
from typing import Iterator, Sequence

from .framebuffer import FrameBuffer
from .mapgrid import DOOR_CLOSED, DOOR_OPEN, GameMap
from .raycast import (
    BLACK,
    BLUE,
    FOV,
    GREY,
    GRID_PIX,
    LIGHTBLUE,
    MAGENTA,
    MINI_PIX,
    WHITE,
    Player,
    deg_to_rad,
    fix_angle,
)

Grid = Sequence[Sequence[str]]

SCALE = GRID_PIX // MINI_PIX
PLAYER_MARK = 5
RAY_STEP = 0.2
WALL = "1"
_FLOOR_CHARS = ("0", "W", "E", "N", "S")
_BLOCKING = (WALL, DOOR_CLOSED)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _at(grid: Grid, row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def tile_colour(char: str) -> int:
    """Return the minimap colour of one map cell."""
    if char == WALL:
        return BLUE
    if char in _FLOOR_CHARS:
        return LIGHTBLUE
    if char in (DOOR_CLOSED, DOOR_OPEN):
        return GREY
    return WHITE


def _fill_square(frame: FrameBuffer, x: int, y: int, colour: int) -> None:
    for i in range(MINI_PIX):
        for j in range(MINI_PIX):
            frame.put(x + i, y + j, colour)


def _draw_grid(frame: FrameBuffer, width: int, height: int) -> None:
    pixel_width = width * MINI_PIX
    pixel_height = height * MINI_PIX
    for x in range(0, pixel_width, MINI_PIX):
        for y in range(pixel_height):
            frame.put(x, y, BLACK)
    for x in range(pixel_width):
        for y in range(0, pixel_height, MINI_PIX):
            frame.put(x, y, BLACK)


def draw_minimap(frame: FrameBuffer, game_map: GameMap) -> None:
    """Draw every map cell as a coloured tile, then the grid lines over them."""
    grid = game_map.grid
    for row in range(game_map.height):
        for col in range(game_map.width):
            colour = tile_colour(_at(grid, row, col))
            _fill_square(frame, col * MINI_PIX, row * MINI_PIX, colour)
    _draw_grid(frame, game_map.width, game_map.height)


def draw_player(frame: FrameBuffer, player: Player) -> None:
    """Mark the player's minimap position with a small square."""
    left = player.x / SCALE - 2
    top = player.y / SCALE - 2
    for dx in range(PLAYER_MARK):
        for dy in range(PLAYER_MARK):
            frame.put(int(dx + left), int(dy + top), MAGENTA)


def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield the pixels of a Bresenham line from ``(x0, y0)`` to ``(x1, y1)``."""
    x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
    dx = abs(x1 - x0)
    sx = 1 if x1 > x0 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y1 > y0 else -1
    error = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        error2 = error * 2
        if error2 <= dx:
            error += dx
            y0 += sy
        if error2 >= dy:
            error += dy
            x0 += sx


def _hits_minimap_wall(grid: Grid, player: Player, x: float, y: float) -> bool:
    if int(player.x / MINI_PIX) == int(x / MINI_PIX) and int(
        player.y / MINI_PIX
    ) == int(y / MINI_PIX):
        return False
    col = _trunc_div(int(x), MINI_PIX)
    row = _trunc_div(int(y), MINI_PIX)
    neighbours = (
        _at(grid, int(y / MINI_PIX - 0.01), col),
        _at(grid, int(y / MINI_PIX + 0.01), col),
        _at(grid, row, int(x / MINI_PIX - 0.01)),
        _at(grid, row, int(x / MINI_PIX + 0.01)),
    )
    return any(cell in _BLOCKING for cell in neighbours)


def minimap_ray_end(grid: Grid, player: Player, ray_angle: float) -> tuple[int, int]:
    """Walk a ray on the minimap until it meets a wall, door or the map's edge."""
    x = player.x / SCALE
    y = player.y / SCALE
    radians = deg_to_rad(ray_angle)
    step_x = math.cos(radians) * RAY_STEP / 2
    step_y = -math.sin(radians) * RAY_STEP / 2
    while True:
        x += step_x
        y += step_y
        cell = _at(grid, _trunc_div(int(y), MINI_PIX), _trunc_div(int(x), MINI_PIX))
        if not cell or cell in _BLOCKING or _hits_minimap_wall(grid, player, x, y):
            return math.floor(x), math.floor(y)


def cast_minimap_rays(
    frame: FrameBuffer, game_map: GameMap, player: Player
) -> list[tuple[int, int]]:
    """Draw the field of view on the minimap and return where each ray ended."""
    count = game_map.width * MINI_PIX // 2
    if count <= 0:
        return []
    grid = game_map.grid
    angle = fix_angle(player.angle - FOV // 2)
    step = FOV / count
    start = (int(player.x / SCALE), int(player.y / SCALE))
    ends = []
    for _ in range(count):
        end = minimap_ray_end(grid, player, angle)
        for px, py in line_points(start[0], start[1], end[0], end[1]):
            frame.put(px, py, BLACK)
        ends.append(end)
        angle = fix_angle(angle + step)
    return ends