import pytest
from PIL import Image

from raycub.colours import rgb
from raycub.cubfile import CubFileError
from raycub.drawing import Direction
from raycub.framebuffer import FrameBuffer, Texture
from raycub.mapgrid import MapError, parse_map
from raycub.raycast import ANGLE, BLUE, GREY, SENSITIVITY, Player
from raycub.render import (
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RETURN,
    KEY_RIGHT,
    KEY_SPACE,
    KEY_W,
    Game,
    load_game,
)

PLAIN_MAP = "111111\n100001\n10N001\n100001\n111111"
DOOR_MAP = "111111\n100001\n10ND01\n100001\n111111"
COLOURS = {
    Direction.NO: 0x111111,
    Direction.SO: 0x222222,
    Direction.WE: 0x333333,
    Direction.EA: 0x444444,
    Direction.DOOR: 0x555555,
}
CEILING = 0x0000AA
FLOOR = 0x00AA00


def solid(colour):
    return Texture(width=64, height=64, pixels=[colour] * 64 * 64)


def make_game(map_str=PLAIN_MAP, bonus=False):
    game_map = parse_map(map_str, doors=bonus)
    textures = {d: solid(c) for d, c in COLOURS.items()}
    return Game(
        game_map=game_map,
        player=Player.from_map(game_map),
        textures=textures,
        ceiling=CEILING,
        floor=FLOOR,
        bonus=bonus,
    )


def test_render_draws_ceiling_floor_and_wall():
    game = make_game()
    frame = game.render(FrameBuffer(width=4, height=2000))
    for x in range(4):
        assert frame.get(x, 0) == CEILING
        assert frame.get(x, 1999) == FLOOR
        assert frame.get(x, 1000) == COLOURS[Direction.SO]


def test_render_bonus_draws_minimap_tiles():
    game = make_game(DOOR_MAP, bonus=True)
    frame = game.render(FrameBuffer(width=100, height=2000))
    assert frame.get(5, 5) == BLUE
    assert frame.get(56, 40) == GREY


def test_escape_ends_game():
    game = make_game()
    assert game.handle_key(KEY_ESC) is False


def test_forward_key_moves_north():
    game = make_game()
    start_x, start_y = game.player.x, game.player.y
    assert game.handle_key(KEY_W) is True
    assert game.player.y < start_y
    assert game.player.x == pytest.approx(start_x)


def test_forward_then_back_returns():
    game = make_game()
    start = (game.player.x, game.player.y)
    game.handle_key(KEY_W)
    game.handle_key(KEY_DOWN)
    assert (game.player.x, game.player.y) == pytest.approx(start)


def test_turn_keys_change_angle():
    game = make_game()
    game.handle_key(KEY_LEFT)
    assert game.player.angle == pytest.approx(90 + ANGLE)
    game.handle_key(KEY_RIGHT)
    game.handle_key(KEY_RIGHT)
    assert game.player.angle == pytest.approx(90 - ANGLE)


def test_door_keys_toggle_door_in_bonus():
    game = make_game(DOOR_MAP, bonus=True)
    game.handle_key(KEY_RETURN)
    assert game.game_map.grid[2][3] == "O"
    game.handle_key(KEY_SPACE)
    assert game.game_map.grid[2][3] == "D"


def test_door_keys_ignored_without_bonus():
    game_map = parse_map(DOOR_MAP, doors=True)
    game = Game(
        game_map=game_map,
        player=Player.from_map(game_map),
        textures={d: solid(c) for d, c in COLOURS.items()},
        ceiling=CEILING,
        floor=FLOOR,
    )
    game.handle_key(KEY_RETURN)
    assert game.game_map.grid[2][3] == "D"


def test_mouse_drag_turns_view():
    game = make_game(bonus=True)
    game.mouse_press(1, 100, 100)
    assert game.dragging is True
    game.mouse_move(120, 100)
    assert game.player.angle == pytest.approx(90 + 20 * SENSITIVITY)
    assert game.mouse_x == 120
    game.mouse_release(1, 120, 100)
    assert game.dragging is False


def test_mouse_move_without_drag_keeps_angle():
    game = make_game(bonus=True)
    game.mouse_press(3, 100, 100)
    assert game.dragging is False
    game.mouse_move(300, 100)
    assert game.player.angle == 90.0


def test_mouse_release_far_outside_stops_drag():
    game = make_game(bonus=True)
    game.mouse_press(1, 10, 10)
    game.mouse_release(3, -1, -1)
    assert game.dragging is False


def _write_texture(path, colour):
    Image.new("RGB", (64, 64), colour).save(path, format="PNG")


def _write_scene(tmp_path, map_str):
    names = {}
    for key, colour in (("no", (10, 0, 0)), ("so", (0, 10, 0)),
                        ("we", (0, 0, 10)), ("ea", (10, 10, 0))):
        path = tmp_path / f"{key}.xpm"
        _write_texture(path, colour)
        names[key] = path
    cub = tmp_path / "scene.cub"
    cub.write_text(
        f"NO {names['no']}\nSO {names['so']}\nWE {names['we']}\n"
        f"EA {names['ea']}\nF 220,100,0\nC 225,30,0\n\n{map_str}\n"
    )
    return cub


def test_load_game_reads_scene(tmp_path):
    cub = _write_scene(tmp_path, PLAIN_MAP)
    game = load_game(cub)
    assert game.ceiling == rgb(225, 30, 0)
    assert game.floor == rgb(220, 100, 0)
    assert game.textures[Direction.NO].pixel(0, 0) == rgb(10, 0, 0)
    assert game.textures[Direction.EA].pixel(63, 63) == rgb(10, 10, 0)
    assert Direction.DOOR not in game.textures
    assert game.player.angle == 90.0


def test_load_game_bonus_loads_door(tmp_path, monkeypatch):
    cub = _write_scene(tmp_path, DOOR_MAP)
    (tmp_path / "textures").mkdir()
    _write_texture(tmp_path / "textures" / "retro_door.xpm", (5, 5, 5))
    monkeypatch.chdir(tmp_path)
    game = load_game(cub, bonus=True)
    assert game.bonus is True
    assert game.textures[Direction.DOOR].pixel(1, 1) == rgb(5, 5, 5)


def test_load_game_bonus_without_door_texture(tmp_path, monkeypatch):
    cub = _write_scene(tmp_path, DOOR_MAP)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CubFileError):
        load_game(cub, bonus=True)


def test_load_game_rejects_open_map(tmp_path):
    cub = _write_scene(tmp_path, "111111\n100001\n10N000\n100001\n111111")
    with pytest.raises(MapError):
        load_game(cub)