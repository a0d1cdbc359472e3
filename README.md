# cubecaster

A small first-person raycaster. It reads a `.cub` scene file that describes
wall textures, floor and ceiling colours and a grid map, checks that the
scene is well formed, and renders it in a pygame window you can walk
around in.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubecaster path/to/level.cub
```

Exactly one argument is accepted, and the file name must end in `.cub`.
Any problem with the arguments, the scene or its textures is printed and
the command exits with status 1.

The window opens at 640×480 and may be resized; the picture is scaled to
fit.

### Controls

| Key          | Action               |
|--------------|----------------------|
| W / S        | move forward / back  |
| A / D        | strafe left / right  |
| Left / Right | turn                 |
| Left Shift   | move faster while held |
| Escape       | quit                 |

Closing the window also quits.

## Scene files

A scene starts with six header lines, in any order and separated by any
number of blank lines:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
```

- Each line is an identifier and one value separated by spaces.
- Texture paths must begin with `./`; they are loaded with pygame, so any
  image format pygame reads will do.
- Colours are three comma-separated groups of decimal digits.
- Each of the six entries must be present and given only once.

The map follows the header and runs to the end of the file:

```
111111
100001
10N001
111111
```

- `1` is a wall, `0` is open floor, a space is outside the map.
- The first map line may hold only walls, floor and whitespace.
- Exactly one of `N`, `S`, `E`, `W` marks the player's start and the
  direction they face.
- Every floor cell and the start cell must be enclosed by walls, and no
  empty line may appear inside the map.

## Using it as a library

```python
from cubecaster.scene import load_scene
from cubecaster.controls import Player

scene = load_scene("level.cub")
player = Player.facing(scene.pov, scene.player_pos)
```

- `cubecaster.scene.parse_scene` takes the text of a scene directly;
  both it and `load_scene` raise `cubecaster.metadata.SceneError` with a
  description when the scene is invalid.
- `cubecaster.mapgrid.validate_map` runs the map checks on a list of rows.
- `cubecaster.raycast.cast_ray`, `cubecaster.raycast.render` and
  `cubecaster.raycast.FrameBuffer` work on plain Python data and need no
  window; `render` fills a frame buffer and returns the wall distance of
  every column.
- `cubecaster.controls.Keys` and `Player.update` apply one frame of
  movement for the keys held.
- `cubecaster.app.Game` ties these together; `Game.frame()` advances and
  redraws one frame without opening a window, and `Game.run()` opens the
  window and plays.

## What it does not do

The game is walking through the maze only: there is no minimap, no
sprites or enemies, no shooting, no mouse look and no sound.