# raycub

A small first-person maze explorer. It reads a `.cub` scene file,
checks it, and draws the maze with grid ray casting in a 1920×1080
pygame window.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
raycub path/to/scene.cub
raycub --bonus path/to/scene.cub
```

The command takes one scene file, whose name must end in `.cub`.
With `--bonus` it also enables doors, a minimap in the top-left corner
and looking around with the mouse.

- With no file, or more than one, a usage message goes to standard
  error and the command exits with status 0.
- When the scene is invalid, its error message goes to standard error
  and the command exits with status 1.
- When the window is closed or Esc is pressed, the command prints
  `*** Thank you for playing! ***` to standard error and exits with
  status 0.

With `--bonus`, the door texture is read from
`textures/retro_door.xpm`, relative to the current directory.

## Scene files

A scene file lists six elements, in any order and with blank lines
allowed between them, and then the map:

```
NO textures/north.xpm
SO textures/south.xpm
WE textures/west.xpm
EA textures/east.xpm
F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

- `NO`, `SO`, `WE` and `EA` name the wall textures. Each path must end
  in `.xpm` and the file must exist and be readable. Textures are
  loaded with Pillow.
- `F` and `C` give the floor and ceiling colours as three whole
  numbers from 0 to 255, separated by commas. Spaces may follow the
  commas (`F 25, 25, 25`); leading, trailing or doubled commas are
  rejected.
- Each element may appear only once, and all six must come before the
  map.
- The map may use only `0`, `1`, spaces and exactly one of `N`, `S`,
  `E`, `W`, which is the player's start and facing. With `--bonus`,
  `D` marks a closed door.
- The floor reachable from the player must be closed by walls and may
  not touch a space. The map may not contain empty lines, nothing but
  map lines may follow it, and the file may not hold a second,
  separate map.

## Controls

| Key | Action |
| --- | --- |
| W / S, ↑ / ↓ | move forward / back |
| A / D | step left / right |
| ← / → | turn by 5 degrees |
| Enter | open a door on or next to your cell (`--bonus`) |
| Space | close an open door on or next to your cell (`--bonus`) |
| Left mouse drag | look around (`--bonus`) |
| Esc | quit |

## Using the library

```python
from raycub.cubfile import load_scene
from raycub.mapgrid import parse_map
from raycub.walls import check_walls_closed

scene = load_scene("maps/example.cub")
print(scene.describe())

game_map = parse_map(scene.map_str, doors=False)
check_walls_closed(game_map)
print(game_map.width, game_map.height, game_map.player_view)
```

Invalid scenes raise `raycub.cubfile.CubFileError` or
`raycub.mapgrid.MapError`; both are subclasses of `ValueError`.

A frame can be drawn without opening a window:

```python
from raycub.framebuffer import FrameBuffer
from raycub.render import load_game

game = load_game("maps/example.cub", bonus=False)
frame = game.render(FrameBuffer(640, 360))
pixels = frame.to_bytes()   # packed RGB, row by row
game.handle_key(13)         # step forward; returns False for Esc (53)
```

Other pieces can be used on their own:

- `raycub.raycast` — `Player`, `cast_ray`, `horizontal_hit`,
  `vertical_hit`, `fix_angle`.
- `raycub.movement` — `movable`, `move_sideways`, `move_front_back`,
  `turn`, `open_door`, `close_door`.
- `raycub.drawing` — `draw_background`, `draw_column`,
  `wall_direction`.
- `raycub.minimap` — `draw_minimap`, `draw_player`,
  `cast_minimap_rays`, `line_points`.
- `raycub.colours` — `rgb`, `change_colour`.
- `raycub.app` — `run(game)` opens the window and runs the event loop;
  `main(argv)` is the `raycub` command.

## What it does not do

There are no sprites, enemies, weapons or sound: the game is walking
through the maze, with doors in `--bonus` mode. The window size is
fixed at 1920×1080, and nothing is saved between runs.