"""Tests for patrol.search: visited cells and loop-trap obstructions."""

from __future__ import annotations

import logging

import pytest

from patrol.config import SearchConfig
from patrol.errors import ConfigurationError
from patrol.grid import Grid, GridWorld
from patrol.search import ObstructionSearch, count_looping_obstructions, simulate
from patrol.types import AgentState, Heading, Position


def _search(world: GridWorld, **kwargs) -> ObstructionSearch:
    return ObstructionSearch(world.grid, world.start, SearchConfig(**kwargs))


class TestFindVisitedPositions:
    def test_single_cell(self) -> None:
        search = ObstructionSearch(Grid.from_rows([[False]]), AgentState(Position(0, 0), Heading.NORTH))
        assert search.find_visited_positions() == {Position(0, 0)}

    def test_straight_line(self) -> None:
        world = GridWorld.from_lines([".", ".", "^"])
        assert _search(world).find_visited_positions() == {(0, 2), (0, 1), (0, 0)}

    def test_wall_ahead(self) -> None:
        world = GridWorld.from_lines(["#", ".", "^"])
        assert _search(world).find_visited_positions() == {(0, 2), (0, 1)}

    def test_example_map(self, example: GridWorld) -> None:
        assert len(_search(example).find_visited_positions()) == 41


class TestFindCyclicObstructions:
    def test_single_cell_has_none(self) -> None:
        search = ObstructionSearch(Grid.from_rows([[False]]), AgentState(Position(0, 0), Heading.NORTH))
        assert search.find_cyclic_obstructions() == set()

    def test_straight_line_has_none(self) -> None:
        world = GridWorld.from_lines([".", ".", "^"])
        assert _search(world).find_cyclic_obstructions() == set()

    def test_race_track(self, race_track: GridWorld) -> None:
        assert _search(race_track).find_cyclic_obstructions() == {Position(2, 2), Position(2, 3)}

    def test_narrow_corridor(self) -> None:
        world = GridWorld.from_lines([".#.", "#.#", "#^#", "..."])
        assert _search(world).find_cyclic_obstructions() == {Position(1, 3)}

    def test_example_map(self, example: GridWorld) -> None:
        assert len(_search(example).find_cyclic_obstructions()) == 6

    def test_start_is_never_a_candidate(self, example: GridWorld) -> None:
        search = _search(example)
        assert example.start.position in search.find_visited_positions()
        assert example.start.position not in search.candidates()
        assert example.start.position not in search.find_cyclic_obstructions()

    @pytest.mark.parametrize("lines", [
        [".#..", "#..#", "#^..", "...."],
        [".#.", "#.#", "#^#", "..."],
        ["....#.....", ".........#", "..........", "..#.......", ".......#..",
         "..........", ".#..^.....", "........#.", "#.........", "......#..."],
    ])
    def test_result_is_within_visited_minus_start(self, lines) -> None:
        world = GridWorld.from_lines(lines)
        search = _search(world)
        visited = search.find_visited_positions()
        assert search.find_cyclic_obstructions() <= visited - {world.start.position}

    def test_workers_agree_with_serial(self, example: GridWorld) -> None:
        serial = _search(example).find_cyclic_obstructions()
        parallel = _search(example, workers=2, chunk_size=5).find_cyclic_obstructions()
        assert parallel == serial

    def test_chunking_does_not_change_result(self, example: GridWorld) -> None:
        assert (_search(example, chunk_size=1).find_cyclic_obstructions()
                == _search(example, chunk_size=1000).find_cyclic_obstructions())

    def test_logs_summary(self, race_track: GridWorld, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="patrol.search")
        _search(race_track).find_cyclic_obstructions()
        assert "2 of 4 candidate obstructions trap the guard" in caplog.text


class TestConfiguration:
    def test_bad_start_fails_at_construction(self) -> None:
        grid = Grid.from_rows([[False, False]])
        with pytest.raises(ConfigurationError):
            ObstructionSearch(grid, AgentState(Position(5, 0)))

    def test_blocked_start_fails_at_construction(self) -> None:
        grid = Grid.from_rows([[True, False]])
        with pytest.raises(ConfigurationError):
            ObstructionSearch(grid, AgentState(Position(0, 0)))

    @pytest.mark.parametrize("kwargs", [{"workers": 0}, {"chunk_size": 0}])
    def test_bad_config(self, kwargs) -> None:
        with pytest.raises(ConfigurationError):
            SearchConfig(**kwargs)


def test_module_functions(race_track: GridWorld) -> None:
    path = simulate(race_track.grid, race_track.start)
    assert path.first == race_track.start.position
    assert len(path) == 5
    assert count_looping_obstructions(race_track.grid, race_track.start) == {(2, 2), (2, 3)}
