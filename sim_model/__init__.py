# =============================================================================
# Sim Model Package
# =============================================================================
# Entity layer for the robot arena simulation.
#
# Responsibilities:
# - Segment geometry (intersection, point distance, sensor rays)
# - Heading normalization helpers
# - ArenaItem base record and the closed ItemKind set
# - Static square obstacles
#
# Usage:
#   from sim_model import Segment, Obstacle
#   wall = Obstacle(item_id=0, x=100.0, y=100.0, radius=15.0)
#   wall.blocks(Segment(60, 100, 140, 100))
# =============================================================================

from .geometry import (
    Segment,
    intersects,
    intersection_point,
    distance_to_point,
    point_distance,
    ray_from,
    square_edges,
    normalize_heading,
    angle_difference,
    heading_vector
)
from .items import ItemKind, ArenaItem, Obstacle

# Re-export config for convenience
from .config import (
    DEFAULT_ROBOT_RADIUS,
    DEFAULT_OBSTACLE_RADIUS,
    ROBOT_SPEED,
    WHISKER_LENGTH,
    SENSOR_RANGE
)

__all__ = [
    # Geometry
    'Segment',
    'intersects',
    'intersection_point',
    'distance_to_point',
    'point_distance',
    'ray_from',
    'square_edges',
    'normalize_heading',
    'angle_difference',
    'heading_vector',

    # Items
    'ItemKind',
    'ArenaItem',
    'Obstacle',

    # Config exports
    'DEFAULT_ROBOT_RADIUS',
    'DEFAULT_OBSTACLE_RADIUS',
    'ROBOT_SPEED',
    'WHISKER_LENGTH',
    'SENSOR_RANGE',
]

__version__ = '1.0.0'
