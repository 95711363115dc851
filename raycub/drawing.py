"""Drawing the 3D view: background and textured wall columns."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Mapping, Optional, Sequence, Union

from .framebuffer import FrameBuffer, Texture
from .raycast import GRID_PIX, PR_PLANE, TEX_PIX, WIN_SIZE_Y, RayHit


class Direction(IntEnum):
    """The wall faces, and the door, each with its own texture."""

    NO = 0
    SO = 1
    WE = 2
    EA = 3
    DOOR = 4


Textures = Union[Mapping[Direction, Texture], Sequence[Texture]]


def _c_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend."""
    return int(math.fmod(value, modulus))


def wall_direction(ray_angle: float, shortest: str) -> Optional[Direction]:
    """Return the wall face a ray hits, or None if it cannot be told."""
    angle = int(ray_angle)
    if shortest not in ("h", "v"):
        return None
    vertical = shortest == "v"
    if 0 <= angle < 90:
        return Direction.WE if vertical else Direction.SO
    if 90 <= angle < 180:
        return Direction.EA if vertical else Direction.SO
    if 180 <= angle < 270:
        return Direction.EA if vertical else Direction.NO
    if 270 <= angle < 360:
        return Direction.WE if vertical else Direction.NO
    return None


def draw_background(frame: FrameBuffer, ceiling: int, floor: int) -> None:
    """Paint the upper half in the ceiling colour and the rest in the floor colour."""
    middle = frame.height // 2 + 1
    frame.fill_rows(0, middle, ceiling)
    frame.fill_rows(middle, frame.height, floor)


def texture_x(direction: Direction, x: float, y: float) -> int:
    """Return the texture column for a wall hit at ``(x, y)``."""
    if direction == Direction.NO:
        return _c_mod(int(x - 1), TEX_PIX)
    if direction == Direction.WE:
        return _c_mod(int(y), TEX_PIX)
    if direction == Direction.SO:
        return _c_mod(int(x), TEX_PIX)
    if direction == Direction.EA:
        return TEX_PIX - 1 - _c_mod(int(y), TEX_PIX)
    raise ValueError(f"no texture column rule for {direction!r}")


def texture_start_y(wall_height: float, y_step: float) -> float:
    """Return the texture row the wall column starts at."""
    if wall_height > WIN_SIZE_Y:
        return ((wall_height - WIN_SIZE_Y) / GRID_PIX) * y_step
    return 0.0


def draw_column(
    frame: FrameBuffer,
    column: int,
    hit: RayHit,
    ray_angle: float,
    textures: Textures,
    door_texture: Optional[Texture] = None,
) -> int:
    """Draw the textured wall slice of one ray and return the wall height.

    Columns are counted from the right edge of the frame.
    """
    if hit.distance <= 0:
        raise ValueError("wall distance must be positive")
    wall_height = GRID_PIX / hit.distance * PR_PLANE
    y_step = TEX_PIX / wall_height
    direction = wall_direction(ray_angle, hit.shortest)
    if direction is None:
        raise ValueError("Wall position can't be found")
    tex_x = texture_x(direction, hit.x, hit.y)
    tex_start = texture_start_y(wall_height, y_step)
    if hit.door:
        if door_texture is None:
            raise ValueError("no door texture loaded")
        texture = door_texture
    else:
        texture = textures[direction]

    pos = frame.width - (int(column) + 1)
    wall = int(wall_height)
    wall_start = frame.height // 2 - wall // 2
    first = max(0, -wall_start)
    last = min(wall, frame.height - wall_start)
    for i in range(first, last):
        frame.put(pos, wall_start + i, texture.pixel(tex_x, tex_start + i * y_step))
    return wall