"""Tests for patrol.viz PNG rendering."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from patrol.grid import GridWorld
from patrol.search import ObstructionSearch
from patrol.viz import draw_world_png


def test_draws_walls_path_traps_and_start(tmp_path: Path, race_track: GridWorld) -> None:
    search = ObstructionSearch(race_track.grid, race_track.start)
    out = tmp_path / "png" / "track.png"
    draw_world_png(race_track, search.baseline(), search.find_cyclic_obstructions(), str(out), cell=5)

    img = Image.open(out).convert("RGB")
    assert img.size == (20, 20)

    def at(x: int, y: int):
        return img.getpixel((x * 5 + 2, y * 5 + 2))

    assert at(1, 0) == (0, 0, 0)  # wall
    assert at(3, 3) == (240, 240, 240)  # never visited
    assert at(2, 1) == (160, 190, 255)  # path
    assert at(2, 3) == (255, 170, 80)  # trap
    assert at(1, 2) == (100, 220, 120)  # start


def test_draws_without_overlays(tmp_path: Path) -> None:
    world = GridWorld.from_lines(["#.", ".^", ".."])
    out = tmp_path / "plain.png"
    draw_world_png(world, None, None, str(out), cell=4)
    assert Image.open(out).size == (8, 12)
