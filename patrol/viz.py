# patrol/viz.py
from __future__ import annotations
import os
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from .config import DEFAULT_CELL
from .grid import GridWorld
from .types import Position


def draw_world_png(world: GridWorld,
                   path: Optional[Iterable[Position]],
                   obstructions: Optional[Iterable[Position]],
                   out_png: str,
                   cell: int = DEFAULT_CELL) -> None:
    grid = world.grid
    W, H = grid.width * cell, grid.height * cell
    img = Image.new("RGB", (W, H), (255, 255, 255))
    drw = ImageDraw.Draw(img)

    def fill(x: int, y: int, color) -> None:
        x0, y0 = x * cell, y * cell
        drw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1), fill=color)

    # base grid
    for y in range(grid.height):
        for x in range(grid.width):
            fill(x, y, (0, 0, 0) if grid.blocked[y][x] else (240, 240, 240))

    # guard path
    if path:
        for (x, y) in path:
            fill(x, y, (160, 190, 255))

    # obstruction candidates that trap the guard
    if obstructions:
        for (x, y) in obstructions:
            fill(x, y, (255, 170, 80))

    sx, sy = world.start.position
    fill(sx, sy, (100, 220, 120))

    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)
    img.save(out_png)
