# =============================================================================
# Sim Model - Arena Items
# =============================================================================
# Base record shared by everything placed in the arena, the closed set of
# item kinds used by serialization, and the static square obstacle.
# =============================================================================

import math
from enum import Enum
from typing import List, Optional, Tuple

from .geometry import Segment, point_distance, square_edges


# =============================================================================
# Enumerations
# =============================================================================

class ItemKind(Enum):
    """Item variants. The value is the name written to arena files."""
    ROBOT = "Robot"
    CHASER_ROBOT = "ChaserRobot"
    BEAM_ROBOT = "BeamRobot"
    BUMP_ROBOT = "BumpRobot"
    SMART_ROBOT = "SmartRobot"
    OBSTACLE = "Obstacle"

    @property
    def is_robot(self) -> bool:
        return self is not ItemKind.OBSTACLE

    @classmethod
    def parse(cls, name: str) -> Optional['ItemKind']:
        """Look up a kind by its persisted name; None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


def require_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


# =============================================================================
# Base Item
# =============================================================================

class ArenaItem:
    """
    Anything placed in the arena: a centre, a bounding-circle radius and an id.

    Ids are handed out by the owning arena and are never reused within it.
    """

    kind: ItemKind = None

    def __init__(self, item_id: int, x: float, y: float, radius: float):
        """
        Args:
            item_id: Unique id assigned by the arena
            x: Centre x coordinate
            y: Centre y coordinate
            radius: Bounding-circle radius (must be > 0)

        Raises:
            ValueError: If radius is not a positive finite number
        """
        self.id = int(item_id)
        self.x = float(x)
        self.y = float(y)
        self._radius = require_positive("radius", radius)

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float):
        self._radius = require_positive("radius", value)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: Optional['ArenaItem']) -> float:
        """Centre distance, or infinity when other is None."""
        if other is None:
            return math.inf
        return point_distance(self.x, self.y, other.x, other.y)

    def intersects(self, other: Optional['ArenaItem']) -> bool:
        if other is None:
            return False
        return self.distance_to(other) < self.radius + other.radius

    def contains_point(self, px: float, py: float) -> bool:
        return point_distance(px, py, self.x, self.y) <= self.radius

    def to_record(self) -> Tuple[str, float, float, float]:
        return (self.kind.value, self.x, self.y, self.radius)

    def describe(self) -> str:
        return f"{self.kind.value} at ({round(self.x)}, {round(self.y)})"

    def __repr__(self) -> str:
        return f"{self.kind.value}(id={self.id}, x={self.x:.2f}, y={self.y:.2f}, r={self.radius:.2f})"


# =============================================================================
# Obstacle
# =============================================================================

class Obstacle(ArenaItem):
    """Static obstacle with a square footprint of side 2 * radius."""

    kind = ItemKind.OBSTACLE

    def edges(self) -> List[Segment]:
        return square_edges(self.x, self.y, self.radius)

    def blocks(self, segment: Segment) -> bool:
        """True if the segment crosses any of the four square edges."""
        return any(segment.intersects(edge) for edge in self.edges())
