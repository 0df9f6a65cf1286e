# patrol/search.py
from __future__ import annotations
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Sequence, Set
import logging

from .config import SearchConfig
from .grid import Grid, check_start
from .simulator import Cycled, GridSimulator, VisitedPath
from .types import AgentState, Position

logger = logging.getLogger(__name__)


def _looping_subset(grid: Grid, start: AgentState, candidates: Sequence[Position]) -> List[Position]:
    # runs in worker processes too, so it only touches its arguments
    sim = GridSimulator(grid)
    return [c for c in candidates if isinstance(sim.run_detecting_cycle(start, also_block=c), Cycled)]


def _chunks(items: Sequence[Position], size: int) -> List[Sequence[Position]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class ObstructionSearch:
    """
    Finds every single extra obstacle that traps the guard in a loop.

    Candidates come from the guard's unobstructed path (an obstacle anywhere
    else is never reached), minus the start cell. Each candidate is judged by
    a fresh cycle-aware run from the original start.
    """

    def __init__(self, grid: Grid, start: AgentState, config: Optional[SearchConfig] = None):
        check_start(grid, start)
        self.grid = grid
        self.start = start
        self.config = config or SearchConfig()
        self.sim = GridSimulator(grid)

    def baseline(self) -> VisitedPath:
        return self.sim.run_to_completion(self.start)

    def find_visited_positions(self) -> Set[Position]:
        return self.baseline().as_set()

    def candidates(self) -> List[Position]:
        return [p for p in self.baseline() if p != self.start.position]

    def find_cyclic_obstructions(self) -> Set[Position]:
        cands = self.candidates()
        batches = _chunks(cands, self.config.chunk_size)
        found: Set[Position] = set()
        if self.config.workers == 1 or len(batches) <= 1:
            for batch in batches:
                found.update(_looping_subset(self.grid, self.start, batch))
        else:
            with ProcessPoolExecutor(max_workers=self.config.workers) as pool:
                futures = [pool.submit(_looping_subset, self.grid, self.start, b) for b in batches]
                for fut in futures:
                    found.update(fut.result())
        logger.debug("checked %d candidates in %d batches", len(cands), len(batches))
        logger.info("%d of %d candidate obstructions trap the guard", len(found), len(cands))
        return found


def simulate(grid: Grid, start: AgentState) -> VisitedPath:
    return GridSimulator(grid).run_to_completion(start)


def count_looping_obstructions(grid: Grid, start: AgentState) -> Set[Position]:
    return ObstructionSearch(grid, start).find_cyclic_obstructions()
