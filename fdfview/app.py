"""Interactive wireframe viewer for height maps."""

from __future__ import annotations

import sys
from typing import Iterator, Sequence

from fdfview.keys import KeyState
from fdfview.mapfile import MapError, load_map
from fdfview.transform import Scene

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
BACKGROUND = (0, 0, 0)
LINE_COLOR = (255, 0, 0)

Point = tuple[int, int]
Edge = tuple[Point, Point]


def _edges(coords: Sequence[Sequence[Point]]) -> Iterator[Edge]:
    rows = len(coords)
    for i, (line, below) in enumerate(zip(coords, coords[1:])):
        cols = len(line)
        for j, (here, right) in enumerate(zip(line, line[1:])):
            yield here, right
            yield here, below[j]
            if i + 2 == rows:
                yield below[j], below[j + 1]
            if j + 2 == cols:
                yield right, below[j + 1]


def grid_edges(coords: Sequence[Sequence[Point]]) -> list[Edge]:
    """Line segments joining each grid point to its right and lower neighbours.

    Grids with a single row or a single column yield no segments.
    """
    return list(_edges(coords))


def run(scene: Scene, width: int, height: int) -> None:
    """Open a window and draw the scene until it is closed or Escape is pressed."""
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("fdfview")
        keys = KeyState()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    keys.set_key(pygame.key.name(event.key), True)
                elif event.type == pygame.KEYUP:
                    keys.set_key(pygame.key.name(event.key), False)

            scene.apply_keys(keys)
            scene.rebuild()

            screen.fill(BACKGROUND)
            for start, end in grid_edges(scene.screen_coords(width, height)):
                pygame.draw.line(screen, LINE_COLOR, start, end)
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the map named on the command line and show it; return an exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    print("Getting input file")
    if not args:
        print("ERROR: Incorrect amount of args")
        return 1
    try:
        fdf_map = load_map(args[0])
    except MapError as exc:
        print(f"ERROR: {exc}")
        return 1
    scene = Scene.from_map(fdf_map)
    run(scene, SCREEN_WIDTH, SCREEN_HEIGHT)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())