# patrol/__init__.py
from .types import Position, Heading, AgentState
from .errors import PatrolError, ConfigurationError, InvariantViolation, UnboundedRunError
from .config import SearchConfig
from .grid import Grid, GridWorld
from .simulator import GridSimulator, VisitedPath, Terminated, Cycled
from .search import ObstructionSearch, simulate, count_looping_obstructions
from .viz import draw_world_png

__all__ = [
    "Position", "Heading", "AgentState",
    "PatrolError", "ConfigurationError", "InvariantViolation", "UnboundedRunError",
    "SearchConfig", "Grid", "GridWorld",
    "GridSimulator", "VisitedPath", "Terminated", "Cycled",
    "ObstructionSearch", "simulate", "count_looping_obstructions",
    "draw_world_png",
]
