# fdfview

An interactive wireframe viewer for `.fdf` height maps. Each number in the map
is the height of one grid point; the grid is drawn as a red wireframe on a
black background with an orthographic projection and can be moved, rotated
and scaled from the keyboard.

## Installing

```
pip install .
```

## Running

```
fdfview path/to/map.fdf
```

The file name must end in `fdf`. If no file is given, or the file cannot be
opened or is malformed, the command prints an `ERROR:` line and exits with
status 1. Otherwise an 800×600 window opens and stays open until it is closed
or Escape is pressed.

## Map format

The file starts with rows of whitespace-separated integers (a minus sign is
allowed directly before a digit). The map ends at the first line holding
anything else; blank lines before and after it are ignored. After the map
come colour lines starting with `HIGH` or `LOW`, each with four numbers of at
most 256:

```
0 0 0 0
0 5 5 0
0 5 5 0
0 0 0 0

HIGH: 255 255 255 255
LOW: 0 0 0 255
```

Any other non-blank line after the map is an error, and at least one of
`HIGH` and `LOW` must appear exactly once. Rows shorter than the longest row
are padded with height 0. Errors are raised as `fdfview.mapfile.MapError`.

## Controls

| Keys    | Action                         |
|---------|--------------------------------|
| W / S   | move up / down                 |
| A / D   | move left / right              |
| I / J   | rotate around the x axis       |
| O / K   | rotate around the y axis       |
| P / L   | rotate around the z axis       |
| Q / E   | grow / shrink                  |
| Esc     | quit                           |

Keys act for as long as they are held down; each frame advances the held
movements by a small fixed step.

## Using it from Python

```python
from fdfview.mapfile import load_map
from fdfview.transform import Scene
from fdfview.app import run

fdf_map = load_map("maps/pyramid.fdf")
scene = Scene.from_map(fdf_map)
run(scene, 800, 600)
```

`parse_map(lines)` builds an `FdfMap` from lines already in memory, each
ending in a newline. `Scene.screen_coords(width, height)` gives the projected
pixel position of every grid point without opening a window, and
`fdfview.app.grid_edges(coords)` turns those positions into the line segments
that are drawn. `fdfview.keys.KeyState` records which control keys are held
and is fed to `Scene.apply_keys`.

## What it does not do

The `HIGH` and `LOW` colours are read and stored on `FdfMap` as
`color_high` and `color_low`, but drawing does not use them: every line is
red. Only an orthographic projection is offered; there is no perspective view.