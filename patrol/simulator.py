# patrol/simulator.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Union

from .errors import ConfigurationError, InvariantViolation, UnboundedRunError
from .grid import Grid, check_start
from .types import AgentState, Position


@dataclass
class VisitedPath:
    """Distinct positions of one run in first-visit order, plus how the run ended."""
    order: List[Position]
    last: AgentState  # state the guard stepped off the grid from
    ticks: int
    _members: Set[Position] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._members = set(self.order)

    @property
    def first(self) -> Position:
        return self.order[0]

    def as_set(self) -> Set[Position]:
        return set(self._members)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.order)

    def __contains__(self, p: object) -> bool:
        return p in self._members


@dataclass(frozen=True)
class Terminated:
    last: AgentState
    ticks: int


@dataclass(frozen=True)
class Cycled:
    repeated: AgentState
    ticks: int


RunOutcome = Union[Terminated, Cycled]


class GridSimulator:
    """
    Steps a single guard through a static grid.
    Each tick the guard probes the cell ahead: off the grid ends the run,
    blocked turns it 90 degrees clockwise in place, anything else is entered.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        # every tick changes state, so more ticks than states means a repeat
        self.max_ticks = grid.area * 4

    def _blocked(self, p: Position, also_block: Optional[Position]) -> bool:
        return p == also_block or self.grid.is_blocked(p)

    def step(self, state: AgentState, also_block: Optional[Position] = None) -> Optional[AgentState]:
        """One tick. Returns None once the guard has left the grid."""
        nxt = state.ahead()
        if not self.grid.in_bounds(nxt):
            return None
        if self._blocked(nxt, also_block):
            return state.turned()
        return self._enter(state, nxt, also_block)

    def _enter(self, state: AgentState, nxt: Position, also_block: Optional[Position]) -> AgentState:
        if self._blocked(nxt, also_block):
            raise InvariantViolation(f"guard at {tuple(state.position)} tried to enter blocked {tuple(nxt)}")
        return state.moved_to(nxt)

    def run_to_completion(self, start: AgentState) -> VisitedPath:
        check_start(self.grid, start)
        seen: Dict[Position, None] = {}
        state = start
        for tick in range(self.max_ticks + 1):
            seen[state.position] = None
            nxt = self.step(state)
            if nxt is None:
                return VisitedPath(list(seen), state, tick + 1)
            state = nxt
        raise UnboundedRunError(
            f"guard from {tuple(start.position)} did not leave the grid within {self.max_ticks} ticks")

    def run_detecting_cycle(self, start: AgentState, also_block: Optional[Position] = None) -> RunOutcome:
        check_start(self.grid, start)
        if also_block is not None and also_block == start.position:
            raise ConfigurationError(f"cannot block the guard's start {tuple(start.position)}")
        seen: Set[AgentState] = set()
        state = start
        ticks = 0
        while True:
            if state in seen:
                return Cycled(state, ticks)
            seen.add(state)
            nxt = self.step(state, also_block)
            ticks += 1
            if nxt is None:
                return Terminated(state, ticks)
            if ticks > self.max_ticks:
                raise InvariantViolation(f"no repeat or exit after {self.max_ticks} ticks")
            state = nxt
