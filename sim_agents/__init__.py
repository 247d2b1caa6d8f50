# =============================================================================
# Sim Agents Package
# =============================================================================
# Per-tick behaviour of the mobile arena items.
#
# Responsibilities:
# - Shared robot state (heading, speed, whisker, wall reflection)
# - Behaviour variants: Basic, Chaser, Beam, Bump, Smart
# - Kind -> class registry used by placement and deserialization
#
# Usage:
#   from sim_agents import robot_class_for
#   from sim_model import ItemKind
#   cls = robot_class_for(ItemKind.BEAM_ROBOT)
#   robot = cls(item_id=3, x=200.0, y=150.0, heading=0.0)
#   robot.tick(arena)
# =============================================================================

from sim_model import ItemKind

# Core components
from .base import BaseRobot

# Behaviour variants
from .robots import (
    Robot,
    ChaserRobot,
    BeamRobot,
    BumpRobot,
    SmartRobot
)

ROBOT_CLASSES = {
    ItemKind.ROBOT: Robot,
    ItemKind.CHASER_ROBOT: ChaserRobot,
    ItemKind.BEAM_ROBOT: BeamRobot,
    ItemKind.BUMP_ROBOT: BumpRobot,
    ItemKind.SMART_ROBOT: SmartRobot,
}


def robot_class_for(kind: ItemKind):
    """Return the robot class for a kind (KeyError for Obstacle)."""
    return ROBOT_CLASSES[kind]


__all__ = [
    # Base class
    'BaseRobot',

    # Variants
    'Robot',
    'ChaserRobot',
    'BeamRobot',
    'BumpRobot',
    'SmartRobot',

    # Registry
    'ROBOT_CLASSES',
    'robot_class_for',
]

__version__ = '1.0.0'
