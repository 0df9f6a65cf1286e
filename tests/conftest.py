"""Shared map fixtures."""

from __future__ import annotations

import pytest

from patrol.grid import GridWorld

# Escapes south through (2,3). Blocking (2,2) or (2,3) closes the loop.
RACE_TRACK = [
    ".#..",
    "#..#",
    "#^..",
    "....",
]

# Same track with the exit already closed: the guard circles forever.
CLOSED_TRACK = [
    ".#..",
    "#..#",
    "#^..",
    "..#.",
]

EXAMPLE = [
    "....#.....",
    ".........#",
    "..........",
    "..#.......",
    ".......#..",
    "..........",
    ".#..^.....",
    "........#.",
    "#.........",
    "......#...",
]


@pytest.fixture
def race_track() -> GridWorld:
    return GridWorld.from_lines(RACE_TRACK)


@pytest.fixture
def closed_track() -> GridWorld:
    return GridWorld.from_lines(CLOSED_TRACK)


@pytest.fixture
def example() -> GridWorld:
    return GridWorld.from_lines(EXAMPLE)
