# =============================================================================
# Sim Model - Segment Geometry
# =============================================================================
# 2D line-segment math used by every sensor: length, point distance,
# segment/segment intersection. Headings are degrees, y axis points down
# (screen convention), so a heading of 90 moves toward larger y.
# =============================================================================

import numpy as np
from typing import List, Optional, Tuple

from .config import FULL_TURN

Point = Tuple[float, float]


def normalize_heading(angle: float) -> float:
    """Normalize a heading in degrees to [0, 360)."""
    angle = float(angle) % FULL_TURN
    # -1e-15 % 360 rounds to 360.0
    if angle >= FULL_TURN:
        angle = 0.0
    return angle


def angle_difference(target: float, current: float) -> float:
    """Signed shortest rotation from current to target, in (-180, 180]."""
    diff = normalize_heading(target - current)
    if diff > FULL_TURN / 2:
        diff -= FULL_TURN
    return diff


def heading_vector(heading: float) -> np.ndarray:
    """Unit vector for a heading in degrees."""
    rad = np.deg2rad(heading)
    return np.array([np.cos(rad), np.sin(rad)])


def point_distance(ax: float, ay: float, bx: float, by: float) -> float:
    return float(np.hypot(bx - ax, by - ay))


class Segment:
    """
    Finite line segment from (x1, y1) to (x2, y2).

    Segments are mutable so sensor arrays can re-aim cached rays every tick
    without allocating.
    """

    __slots__ = ('x1', 'y1', 'x2', 'y2')

    def __init__(self, x1: float, y1: float, x2: float, y2: float):
        self.set(x1, y1, x2, y2)

    def set(self, x1: float, y1: float, x2: float, y2: float):
        self.x1 = float(x1)
        self.y1 = float(y1)
        self.x2 = float(x2)
        self.y2 = float(y2)

    @property
    def start(self) -> Point:
        return (self.x1, self.y1)

    @property
    def end(self) -> Point:
        return (self.x2, self.y2)

    def length(self) -> float:
        return point_distance(self.x1, self.y1, self.x2, self.y2)

    def _parameters(self, other: 'Segment') -> Optional[Tuple[float, float]]:
        """
        Solve for the intersection parameters (ua along self, ub along other).

        Returns:
            (ua, ub) or None when the segments are parallel or coincident
        """
        denom = ((other.y2 - other.y1) * (self.x2 - self.x1)
                 - (other.x2 - other.x1) * (self.y2 - self.y1))
        if denom == 0.0:
            return None

        ua = ((other.x2 - other.x1) * (self.y1 - other.y1)
              - (other.y2 - other.y1) * (self.x1 - other.x1)) / denom
        ub = ((self.x2 - self.x1) * (self.y1 - other.y1)
              - (self.y2 - self.y1) * (self.x1 - other.x1)) / denom
        return ua, ub

    def intersects(self, other: 'Segment') -> bool:
        """True if the crossing point lies on both finite segments."""
        params = self._parameters(other)
        if params is None:
            return False
        ua, ub = params
        return 0.0 <= ua <= 1.0 and 0.0 <= ub <= 1.0

    def intersection_point(self, other: 'Segment') -> Optional[Point]:
        params = self._parameters(other)
        if params is None:
            return None
        ua, ub = params
        if not (0.0 <= ua <= 1.0 and 0.0 <= ub <= 1.0):
            return None
        return (self.x1 + ua * (self.x2 - self.x1),
                self.y1 + ua * (self.y2 - self.y1))

    def distance_to_point(self, px: float, py: float) -> float:
        """
        Distance from a point to the closest point of the segment.

        The projection parameter is clamped to [0, 1], so points beyond
        either end measure to that endpoint.
        """
        start = np.array([self.x1, self.y1])
        direction = np.array([self.x2, self.y2]) - start
        len2 = float(np.dot(direction, direction))
        if len2 == 0.0:
            return point_distance(px, py, self.x1, self.y1)

        t = float(np.dot(np.array([px, py]) - start, direction)) / len2
        t = min(1.0, max(0.0, t))
        proj = start + t * direction
        return point_distance(px, py, proj[0], proj[1])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (other.x1, other.y1, other.x2, other.y2)

    def __repr__(self) -> str:
        return f"Segment({self.x1}, {self.y1} -> {self.x2}, {self.y2})"


# =============================================================================
# Functional helpers
# =============================================================================

def intersects(segment_a: Segment, segment_b: Segment) -> bool:
    return segment_a.intersects(segment_b)


def intersection_point(segment_a: Segment, segment_b: Segment) -> Optional[Point]:
    return segment_a.intersection_point(segment_b)


def distance_to_point(segment: Segment, point: Point) -> float:
    return segment.distance_to_point(point[0], point[1])


def ray_from(x: float, y: float, heading: float, length: float) -> Segment:
    """Segment of the given length starting at (x, y) along heading (degrees)."""
    direction = heading_vector(heading)
    return Segment(x, y, x + length * direction[0], y + length * direction[1])


def square_edges(cx: float, cy: float, half: float) -> List[Segment]:
    """Top, bottom, left and right edges of an axis-aligned square."""
    left, right = cx - half, cx + half
    top, bottom = cy - half, cy + half
    return [
        Segment(left, top, right, top),
        Segment(left, bottom, right, bottom),
        Segment(left, top, left, bottom),
        Segment(right, top, right, bottom),
    ]
