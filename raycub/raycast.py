"""Grid ray casting: player state and wall hits."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .mapgrid import DOOR_CLOSED, GameMap

WIN_SIZE_X = 1920
WIN_SIZE_Y = 1080

FOV = 60
MINI_PIX = 16
GRID_PIX = 64
TEX_PIX = 64
ANGLE = 5
SPEED = 5
PLAYER_S = 5
PR_PLANE = 1662
SENSITIVITY = 0.05
MOVE_STEP = 20
MAX_DEPTH = 10000

BLACK = 0x000000
WHITE = 0xFFFFFF
GREEN = 0x009933
OLIVE = 0x808000
KHAKI = 0xE519EFC
GREY = 0x808080
LIGHTBLUE = 0xADD8E6
BLUE = 0x4169E1
RED = 0xFF0000
YELLOW = 0xFFFF00
ORANGE = 0xFFA500
PINK = 0xFFC0CB
PURPLE = 0x800080
CYAN = 0x00FFFF
LAVENDER = 0xE6E6FA
BROWN = 0xA52A2A
MAGENTA = 0xFF00FF
TEAL = 0x008080

_ORIENTATIONS = {"N": 90.0, "S": 270.0, "W": 180.0, "E": 0.0}

Grid = Sequence[Sequence[str]]


def fix_angle(angle: float) -> float:
    """Bring an angle back towards 0-359 by adding or removing one turn."""
    if angle < 0:
        angle += 360
    if angle > 359:
        angle -= 360
    return angle


def deg_to_rad(degree: float) -> float:
    """Convert degrees to radians."""
    return degree * (math.pi / 180.0)


def orientation_angle(view: str) -> float:
    """Return the view angle in degrees for a player start character."""
    try:
        return _ORIENTATIONS[view]
    except KeyError:
        raise ValueError(f"unknown player orientation: {view!r}") from None


@dataclass
class Player:
    """Player position in pixels and view angle in degrees."""

    x: float
    y: float
    angle: float
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def from_map(cls, game_map: GameMap) -> "Player":
        """Place the player at the centre of its start cell."""
        player = cls(
            x=GRID_PIX * game_map.player_col + GRID_PIX / 2,
            y=GRID_PIX * game_map.player_row + GRID_PIX / 2,
            angle=orientation_angle(game_map.player_view),
        )
        player.set_step(MOVE_STEP)
        return player

    def set_step(self, length: float) -> None:
        """Set the movement vector along the view angle with the given length."""
        radians = deg_to_rad(self.angle)
        self.dx = math.cos(radians) * length
        self.dy = -math.sin(radians) * length


@dataclass
class RayHit:
    """Where a ray met a wall and how far away it is."""

    shortest: str
    distance: float
    x: float
    y: float
    door: bool = False


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _cell(value: float) -> int:
    return _trunc_div(int(value), GRID_PIX)


def _at(grid: Grid, row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def is_wall(grid: Grid, player: Player, x: float, y: float, doors: bool = False) -> bool:
    """Tell whether the point lies in a wall cell other than the player's own."""
    if int(player.x / GRID_PIX) == int(x / GRID_PIX) and int(
        player.y / GRID_PIX
    ) == int(y / GRID_PIX):
        return False
    cell = _at(grid, _cell(y), _cell(x))
    return cell == "1" or (doors and cell == DOOR_CLOSED)


def _march(
    grid: Grid,
    player: Player,
    x: float,
    y: float,
    step_x: float,
    step_y: float,
    depth: int,
    doors: bool,
) -> tuple[float, float]:
    height = len(grid)
    width = max((len(row) for row in grid), default=0)
    while depth < MAX_DEPTH:
        col, row = _cell(x), _cell(y)
        if 0 <= col < width and 0 <= row < height and is_wall(grid, player, x, y, doors):
            break
        x += step_x
        y += step_y
        depth += 1
    return x, y


def horizontal_hit(
    grid: Grid, player: Player, ray_angle: float, doors: bool = False
) -> tuple[float, float]:
    """Follow the ray across horizontal grid lines to the first wall."""
    radians = deg_to_rad(ray_angle)
    tangent = math.tan(radians)
    d_tan = 1.0 / tangent if tangent else 0.0
    sine = math.sin(radians)
    x0, y0 = player.x, player.y
    depth = 0
    if sine > 0.001:
        y1 = _cell(y0) * GRID_PIX - 0.0001
        x1 = x0 + (y0 - y1) * d_tan
        step_y = -GRID_PIX
    elif sine < -0.001:
        y1 = _cell(y0) * GRID_PIX + GRID_PIX
        x1 = x0 + (y0 - y1) * d_tan
        step_y = GRID_PIX
    else:
        x1, y1 = x0, y0
        step_y = 0
        depth = MAX_DEPTH
    step_x = -step_y * d_tan
    return _march(grid, player, x1, y1, step_x, step_y, depth, doors)


def vertical_hit(
    grid: Grid, player: Player, ray_angle: float, doors: bool = False
) -> tuple[float, float]:
    """Follow the ray across vertical grid lines to the first wall."""
    radians = deg_to_rad(ray_angle)
    tangent = math.tan(radians)
    cosine = math.cos(radians)
    x0, y0 = player.x, player.y
    depth = 0
    if cosine > 0.001:
        x1 = _cell(x0) * GRID_PIX + GRID_PIX
        y1 = y0 + (x0 - x1) * tangent
        step_x = GRID_PIX
    elif cosine < -0.001:
        x1 = _cell(x0) * GRID_PIX - 0.0001
        y1 = y0 + (x0 - x1) * tangent
        step_x = -GRID_PIX
    else:
        x1, y1 = x0, y0
        step_x = 0
        depth = MAX_DEPTH
    step_y = -step_x * tangent
    return _march(grid, player, x1, y1, step_x, step_y, depth, doors)


def cast_ray(grid: Grid, player: Player, ray_angle: float, doors: bool = False) -> RayHit:
    """Cast one ray and keep the nearer of the horizontal and vertical hits.

    The distance is corrected for the fish-eye effect.
    """
    hx, hy = horizontal_hit(grid, player, ray_angle, doors)
    vx, vy = vertical_hit(grid, player, ray_angle, doors)
    h_length = math.hypot(player.x - hx, player.y - hy)
    v_length = math.hypot(player.x - vx, player.y - vy)
    correction = math.cos(deg_to_rad(ray_angle - player.angle))
    if h_length != 0.0 and (h_length < v_length or v_length == 0.0):
        shortest, length, x, y = "h", h_length, hx, hy
    else:
        shortest, length, x, y = "v", v_length, vx, vy
    door = doors and _at(grid, int(y / GRID_PIX), int(x / GRID_PIX)) == DOOR_CLOSED
    return RayHit(shortest=shortest, distance=length * correction, x=x, y=y, door=door)