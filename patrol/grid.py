# patrol/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
import random, os

from .config import DEFAULT_P_BLOCKED, DEFAULT_SIZE
from .errors import ConfigurationError
from .types import AgentState, Heading, Position

OPEN, BLOCKED, GUARD = ".", "#", "^"
RANDOM_ATTEMPTS = 100


@dataclass(frozen=True)
class Grid:
    blocked: Tuple[Tuple[bool, ...], ...]  # blocked[y][x], True=blocked

    def __post_init__(self) -> None:
        rows = tuple(tuple(bool(c) for c in row) for row in self.blocked)
        if not rows or not rows[0]:
            raise ConfigurationError("grid must have at least one row and one column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ConfigurationError(f"row {y} has {len(row)} cells, expected {width}")
        object.__setattr__(self, "blocked", rows)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[bool]]) -> "Grid":
        return cls(tuple(tuple(row) for row in rows))

    @property
    def width(self) -> int:
        return len(self.blocked[0])

    @property
    def height(self) -> int:
        return len(self.blocked)

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, p: Position) -> bool:
        x, y = p
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, p: Position) -> bool:
        x, y = p
        return self.blocked[y][x]


def check_start(grid: Grid, start: AgentState) -> None:
    if not grid.in_bounds(start.position):
        raise ConfigurationError(
            f"start {tuple(start.position)} is outside the {grid.width}x{grid.height} grid")
    if grid.is_blocked(start.position):
        raise ConfigurationError(f"start {tuple(start.position)} is on a blocked cell")


@dataclass(frozen=True)
class GridWorld:
    grid: Grid
    start: AgentState

    def __post_init__(self) -> None:
        check_start(self.grid, self.start)

    @staticmethod
    def from_lines(lines: Iterable[str]) -> "GridWorld":
        rows: List[List[bool]] = []
        start: Optional[Position] = None
        for y, line in enumerate(raw.rstrip("\r\n") for raw in lines):
            row = []
            for x, ch in enumerate(line):
                if ch == GUARD:
                    if start is not None:
                        raise ConfigurationError(f"second guard at {(x, y)}, first at {tuple(start)}")
                    start = Position(x, y)
                elif ch not in (OPEN, BLOCKED):
                    raise ConfigurationError(f"unexpected map character {ch!r} at {(x, y)}")
                row.append(ch == BLOCKED)
            rows.append(row)
        if start is None:
            raise ConfigurationError(f"map has no guard ({GUARD!r})")
        return GridWorld(Grid.from_rows(rows), AgentState(start, Heading.NORTH))

    @staticmethod
    def load(path: str) -> "GridWorld":
        with open(path, "r") as f:
            lines = [line.strip() for line in f if line.strip()]
        return GridWorld.from_lines(lines)

    @staticmethod
    def random(width: int = DEFAULT_SIZE, height: int = DEFAULT_SIZE, p_blocked: float = DEFAULT_P_BLOCKED,
               seed: Optional[int] = None) -> "GridWorld":
        if width < 1 or height < 1:
            raise ConfigurationError("width and height must be >= 1")
        if not 0.0 <= p_blocked <= 1.0:
            raise ConfigurationError("p_blocked must be in [0.0, 1.0]")
        from .simulator import GridSimulator, Terminated

        rng = random.Random(seed)
        start = AgentState(Position(width // 2, height // 2), Heading.NORTH)
        # redraw until the guard can walk off the map
        for _ in range(RANDOM_ATTEMPTS):
            blocked = [[rng.random() < p_blocked for _ in range(width)] for _ in range(height)]
            blocked[start.position.y][start.position.x] = False
            grid = Grid.from_rows(blocked)
            if isinstance(GridSimulator(grid).run_detecting_cycle(start), Terminated):
                return GridWorld(grid, start)
        raise ConfigurationError(
            f"no {width}x{height} map with p_blocked={p_blocked} lets the guard escape "
            f"after {RANDOM_ATTEMPTS} draws")

    def to_lines(self) -> List[str]:
        out = []
        sx, sy = self.start.position
        for y, row in enumerate(self.grid.blocked):
            chars = [BLOCKED if b else OPEN for b in row]
            if y == sy:
                chars[sx] = GUARD
            out.append("".join(chars))
        return out

    def save(self, path: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            for line in self.to_lines():
                f.write(line + "\n")
