"""Game state: drawing a frame and reacting to the keyboard and mouse."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Union

from .colours import change_colour
from .cubfile import CubFileError, Scene, load_scene
from .drawing import Direction, draw_background, draw_column
from .framebuffer import FrameBuffer, Texture
from .mapgrid import GameMap, parse_map
from .minimap import cast_minimap_rays, draw_minimap, draw_player
from .movement import close_door, move_front_back, move_sideways, open_door, turn
from .raycast import (
    FOV,
    MOVE_STEP,
    PLAYER_S,
    SENSITIVITY,
    WIN_SIZE_X,
    WIN_SIZE_Y,
    Player,
    cast_ray,
    fix_angle,
)
from .walls import check_walls_closed

KEY_A = 0
KEY_S = 1
KEY_D = 2
KEY_W = 13
KEY_RETURN = 36
KEY_SPACE = 49
KEY_ESC = 53
KEY_LEFT = 123
KEY_RIGHT = 124
KEY_DOWN = 125
KEY_UP = 126

MOUSE_LEFT = 1
DOOR_TEXTURE = "textures/retro_door.xpm"


def _inside_window(x: int, y: int) -> bool:
    return 0 <= x < WIN_SIZE_X and 0 <= y < WIN_SIZE_Y


@dataclass
class Game:
    """Everything needed to draw the view and move the player around."""

    game_map: GameMap
    player: Player
    textures: Mapping[Direction, Texture]
    ceiling: int
    floor: int
    bonus: bool = False
    dragging: bool = False
    mouse_x: float = 0.0

    def render(self, frame: FrameBuffer) -> FrameBuffer:
        """Draw background, walls and, with the bonus, the minimap into ``frame``."""
        draw_background(frame, self.ceiling, self.floor)
        grid = self.game_map.grid
        door_texture = self.textures.get(Direction.DOOR)
        angle = fix_angle(self.player.angle - FOV // 2)
        step = FOV / frame.width
        for column in range(frame.width):
            hit = cast_ray(grid, self.player, angle, self.bonus)
            if hit.distance > 0:
                draw_column(frame, column, hit, angle, self.textures, door_texture)
            angle = fix_angle(angle + step)
        if self.bonus:
            draw_minimap(frame, self.game_map)
            cast_minimap_rays(frame, self.game_map, self.player)
            draw_player(frame, self.player)
        return frame

    def handle_key(self, key: int) -> bool:
        """Apply one key press; return False when the game should end."""
        if key == KEY_ESC:
            return False
        grid = self.game_map.grid
        player = self.player
        player.set_step(MOVE_STEP)
        if key == KEY_A:
            move_sideways(grid, player, "left", self.bonus)
        elif key == KEY_D:
            move_sideways(grid, player, "right", self.bonus)
        elif key == KEY_W:
            move_front_back(grid, player, "up", self.bonus)
        elif key == KEY_S:
            move_front_back(grid, player, "down", self.bonus)
        elif self.bonus and key == KEY_RETURN:
            open_door(grid, player)
        elif self.bonus and key == KEY_SPACE:
            close_door(grid, player)
        player.set_step(MOVE_STEP)
        if key == KEY_LEFT:
            turn(player, "left")
        elif key == KEY_RIGHT:
            turn(player, "right")
        elif key == KEY_UP:
            move_front_back(grid, player, "up", self.bonus)
        elif key == KEY_DOWN:
            move_front_back(grid, player, "down", self.bonus)
        return True

    def mouse_press(self, button: int, x: int, y: int) -> None:
        """Start dragging the view with the left button inside the window."""
        if _inside_window(x, y) and button == MOUSE_LEFT:
            self.dragging = True
            self.mouse_x = x

    def mouse_release(self, button: int, x: int, y: int) -> None:
        """Stop dragging on left release or when released far outside."""
        if button == MOUSE_LEFT:
            self.dragging = False
        if not (0 <= x < WIN_SIZE_X) and not (0 <= y < WIN_SIZE_Y):
            self.dragging = False

    def mouse_move(self, x: int, y: int) -> None:
        """Turn the view by the horizontal distance dragged."""
        if not self.dragging:
            return
        if _inside_window(x, y):
            delta = int(self.mouse_x) - x
            self.player.angle = fix_angle(self.player.angle - delta * SENSITIVITY)
            self.player.set_step(PLAYER_S)
        self.mouse_x = x


def load_textures(scene: Scene, bonus: bool = False) -> dict[Direction, Texture]:
    """Load the four wall textures, and the door texture with the bonus."""
    paths: dict[Direction, Union[str, None]] = {
        Direction.NO: scene.no,
        Direction.SO: scene.so,
        Direction.WE: scene.we,
        Direction.EA: scene.ea,
    }
    if bonus:
        paths[Direction.DOOR] = DOOR_TEXTURE
    textures = {}
    for direction, path in paths.items():
        if path is None:
            raise CubFileError(f"Missing {direction.name} texture!")
        try:
            textures[direction] = Texture.from_file(path)
        except OSError as exc:
            raise CubFileError(f"Error creating image from {path}!") from exc
    return textures


def load_game(path: Union[str, os.PathLike], bonus: bool = False) -> Game:
    """Read, validate and prepare a scene file for play."""
    scene = load_scene(path)
    game_map = parse_map(scene.map_str, doors=bonus)
    check_walls_closed(game_map, doors=bonus)
    assert scene.ceiling is not None and scene.floor is not None
    ceiling = change_colour(scene.ceiling)
    floor = change_colour(scene.floor)
    textures = load_textures(scene, bonus)
    return Game(
        game_map=game_map,
        player=Player.from_map(game_map),
        textures=textures,
        ceiling=ceiling,
        floor=floor,
        bonus=bonus,
    )