"""
Purpose: Value types shared by the routing engine (points, footprints, tokens, drag sessions).
Dependencies: None (dataclasses, enum, typing).
Ext Hooks: Extra token attributes (e.g., flight) for oracles that read them.
Host/Oracle: Point is used for both world space (pixels) and route space (cells).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional


class Point(NamedTuple):
    x: float
    y: float


def as_point(value) -> Point:
    """Normalize an oracle or host position ((x, y), {'x', 'y'} or an object with x/y)."""
    if isinstance(value, Point):
        return value
    if isinstance(value, dict):
        return Point(value["x"], value["y"])
    if isinstance(value, (tuple, list)):
        return Point(value[0], value[1])
    return Point(value.x, value.y)


@dataclass(frozen=True)
class Footprint:
    """Token size: width x height in cells."""
    width: int = 1
    height: int = 1


@dataclass
class Token:
    """
    Reference movable piece. Hosts may pass any object with the same attributes;
    the engine only reads position/footprint and never creates or destroys tokens.
    """
    id: str
    name: str = "Token"
    x: float = 0.0  # World-space centre
    y: float = 0.0
    footprint: Footprint = field(default_factory=Footprint)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMPUTING = "computing"
    RESOLVED = "resolved"
    FALLBACK = "fallback"


@dataclass
class DragSession:
    """One drag gesture of one token; created on drag start, deleted at drop or teardown."""
    origin_world: Point
    route: Optional[List[Point]] = None
    active: bool = True
    phase: DragPhase = DragPhase.DRAGGING


@dataclass(frozen=True)
class ReconciledDestination:
    final_target: Point  # Where the user dropped
    query_target: Point  # Nearest cell reachable by a direct step, used for the oracle query

    @property
    def is_reconciled(self) -> bool:
        return self.final_target != self.query_target


@dataclass
class PlannedRoute:
    points: List[Point]
    source: str = "oracle"  # 'oracle' or 'direct'
    reconciled: bool = False

    def distinct_points(self) -> List[Point]:
        """Points with consecutive duplicates removed."""
        result = []
        for point in self.points:
            if not result or result[-1] != point:
                result.append(point)
        return result
