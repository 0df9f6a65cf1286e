# patrol/types.py
from __future__ import annotations
from enum import IntEnum
from typing import NamedTuple, Tuple


class Position(NamedTuple):
    x: int  # column
    y: int  # row


class Heading(IntEnum):
    """Compass heading in degrees, increasing clockwise from north."""
    NORTH = 0
    EAST = 90
    SOUTH = 180
    WEST = 270

    def turned(self) -> "Heading":
        return Heading((self.value + 90) % 360)

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    def ahead(self, p: Position) -> Position:
        x, y = p
        dx, dy = _DELTAS[self]
        return Position(x + dx, y + dy)


_DELTAS = {
    Heading.NORTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
}


class AgentState(NamedTuple):
    position: Position
    heading: Heading = Heading.NORTH

    def turned(self) -> "AgentState":
        return AgentState(self.position, self.heading.turned())

    def moved_to(self, p: Position) -> "AgentState":
        return AgentState(p, self.heading)

    def ahead(self) -> Position:
        return self.heading.ahead(self.position)
