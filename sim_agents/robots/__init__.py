# =============================================================================
# Sim Agents - Robots Package Init
# =============================================================================

from .basic import Robot
from .chaser import ChaserRobot
from .beam import BeamRobot
from .bump import BumpRobot
from .smart import SmartRobot

__all__ = [
    'Robot',
    'ChaserRobot',
    'BeamRobot',
    'BumpRobot',
    'SmartRobot',
]
