import pytest

from raycub.drawing import (
    Direction,
    draw_background,
    draw_column,
    texture_start_y,
    texture_x,
    wall_direction,
)
from raycub.framebuffer import FrameBuffer, Texture
from raycub.raycast import (
    BLUE,
    BROWN,
    GREEN,
    GRID_PIX,
    ORANGE,
    PR_PLANE,
    PURPLE,
    TEAL,
    TEX_PIX,
    WIN_SIZE_Y,
    YELLOW,
    RayHit,
)

COLOURS = {
    Direction.NO: BLUE,
    Direction.SO: GREEN,
    Direction.WE: ORANGE,
    Direction.EA: PURPLE,
}


def _solid(colour):
    return Texture(width=TEX_PIX, height=TEX_PIX, pixels=[colour] * (TEX_PIX * TEX_PIX))


def _textures():
    return {direction: _solid(colour) for direction, colour in COLOURS.items()}


def _frame(width=8, height=200):
    frame = FrameBuffer(width=width, height=height)
    frame.fill_rows(0, height, TEAL)
    return frame


def _distance_for(height):
    return GRID_PIX * PR_PLANE / height


@pytest.mark.parametrize(
    "angle, shortest, expected",
    [
        (45, "v", Direction.WE),
        (45, "h", Direction.SO),
        (135, "v", Direction.EA),
        (135, "h", Direction.SO),
        (200, "v", Direction.EA),
        (200, "h", Direction.NO),
        (300, "v", Direction.WE),
        (300, "h", Direction.NO),
        (359.5, "h", Direction.NO),
        (360, "h", None),
        (45, "x", None),
    ],
)
def test_wall_direction(angle, shortest, expected):
    assert wall_direction(angle, shortest) == expected


def test_draw_background_split():
    frame = FrameBuffer()
    draw_background(frame, YELLOW, BROWN)
    assert frame.get(0, 0) == YELLOW
    assert frame.get(100, WIN_SIZE_Y // 2) == YELLOW
    assert frame.get(100, WIN_SIZE_Y // 2 + 1) == BROWN
    assert frame.get(frame.width - 1, WIN_SIZE_Y - 1) == BROWN


def test_texture_x_north_and_south():
    assert texture_x(Direction.SO, TEX_PIX * 3 + 5, 0) == 5
    assert texture_x(Direction.NO, TEX_PIX * 3 + 6, 0) == 5


def test_texture_x_east_mirrors_west():
    for y in (0.0, 17.5, 63.9, 130.2, 255.0):
        assert texture_x(Direction.EA, 0, y) + texture_x(Direction.WE, 0, y) == TEX_PIX - 1


def test_texture_x_in_range():
    for direction in (Direction.NO, Direction.SO, Direction.WE, Direction.EA):
        for value in (1.0, 64.0, 99.9, 500.3):
            assert 0 <= texture_x(direction, value, value) < TEX_PIX


def test_texture_x_rejects_door():
    with pytest.raises(ValueError):
        texture_x(Direction.DOOR, 10, 10)


def test_texture_start_y():
    assert texture_start_y(WIN_SIZE_Y, 0.5) == 0.0
    assert texture_start_y(WIN_SIZE_Y + GRID_PIX, 0.5) == pytest.approx(0.5)


def test_draw_column_paints_wall_slice():
    frame = _frame()
    hit = RayHit(shortest="h", distance=_distance_for(100), x=70.0, y=64.0)
    wall = draw_column(frame, 0, hit, 45.0, _textures())
    pos = frame.width - 1
    painted = [y for y in range(frame.height) if frame.get(pos, y) != TEAL]
    assert len(painted) == wall
    assert frame.get(pos, frame.height // 2) == COLOURS[Direction.SO]
    assert frame.get(pos, 0) == TEAL
    assert all(frame.get(0, y) == TEAL for y in range(frame.height))


def test_draw_column_uses_vertical_texture():
    frame = _frame()
    hit = RayHit(shortest="v", distance=_distance_for(50), x=128.0, y=70.0)
    draw_column(frame, 2, hit, 200.0, _textures())
    assert frame.get(frame.width - 3, frame.height // 2) == COLOURS[Direction.EA]


def test_draw_column_tall_wall_fills_column():
    frame = _frame()
    hit = RayHit(shortest="h", distance=_distance_for(600), x=70.0, y=64.0)
    wall = draw_column(frame, 0, hit, 45.0, _textures())
    assert wall > frame.height
    pos = frame.width - 1
    assert all(frame.get(pos, y) != TEAL for y in range(frame.height))


def test_draw_column_door_texture():
    frame = _frame()
    hit = RayHit(shortest="h", distance=_distance_for(100), x=70.0, y=64.0, door=True)
    draw_column(frame, 0, hit, 45.0, _textures(), _solid(YELLOW))
    assert frame.get(frame.width - 1, frame.height // 2) == YELLOW


def test_draw_column_door_without_texture():
    hit = RayHit(shortest="h", distance=_distance_for(100), x=70.0, y=64.0, door=True)
    with pytest.raises(ValueError):
        draw_column(_frame(), 0, hit, 45.0, _textures())


def test_draw_column_rejects_zero_distance():
    hit = RayHit(shortest="h", distance=0.0, x=70.0, y=64.0)
    with pytest.raises(ValueError):
        draw_column(_frame(), 0, hit, 45.0, _textures())


def test_draw_column_unknown_direction():
    hit = RayHit(shortest="h", distance=_distance_for(100), x=70.0, y=64.0)
    with pytest.raises(ValueError):
        draw_column(_frame(), 0, hit, 400.0, _textures())