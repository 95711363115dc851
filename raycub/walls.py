"""Checking that the player's area of a map is enclosed by walls."""

from __future__ import annotations

from .mapgrid import DOOR_CLOSED, PAD_CHAR, GameMap, MapError, pad_row

VISITED = "V"


def build_buffer(rows: list[str], height: int, width: int) -> list[str]:
    """Surround the map with a border of ``X`` cells.

    The result has ``height + 2`` rows of ``width + 2`` characters.
    Short rows are padded with ``X`` so that leaving them counts as
    leaving the map.
    """
    border = PAD_CHAR * (width + 2)
    body = []
    for index in range(height):
        row = rows[index] if index < len(rows) else ""
        body.append(PAD_CHAR + pad_row(row, width) + PAD_CHAR)
    return [border, *body, border]


def check_walls_closed(game_map: GameMap, doors: bool = False) -> list[str]:
    """Flood the floor reachable from the player and return the marked buffer.

    Raises :class:`MapError` if the flood reaches the outer border or an
    empty cell.
    """
    buffer = [
        list(row)
        for row in build_buffer(game_map.rows, game_map.height, game_map.width)
    ]
    walkable = {"0", game_map.player_view}
    if doors:
        walkable.add(DOOR_CLOSED)

    stack = [(game_map.player_row + 1, game_map.player_col + 1)]
    while stack:
        row, col = stack.pop()
        if row < 0 or col < 0 or row >= len(buffer) or col >= len(buffer[row]):
            continue
        cell = buffer[row][col]
        if cell == PAD_CHAR:
            raise MapError("Wall not closed!")
        if cell == " ":
            raise MapError("Map invalid!")
        if cell not in walkable:
            continue
        buffer[row][col] = VISITED
        # Pushed in reverse so that down, right, up, left is the visit order.
        stack.extend(
            ((row, col - 1), (row - 1, col), (row, col + 1), (row + 1, col))
        )
    return ["".join(row) for row in buffer]