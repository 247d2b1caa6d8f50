# =============================================================================
# Sim Agents - Basic Robot
# =============================================================================
# Whisker-line sensing, straight-line motion with wall reflection and an
# optional circular proximity check against obstacles.
# =============================================================================

from typing import Optional

import numpy as np

from sim_model import ItemKind
from sim_model.config import (
    DEFAULT_ROBOT_RADIUS,
    PROXIMITY_AVOIDANCE,
    SENSOR_RANGE,
    WHISKER_LENGTH
)

from ..base import BaseRobot


class Robot(BaseRobot):
    """
    Basic wandering robot.

    Each tick:
    1. Casts the whisker along the heading; reverses if it crosses an obstacle edge
    2. Advances by speed along the heading
    3. Reflects off walls and clamps back inside the arena
    4. If proximity_avoidance is on and an obstacle is within
       radius + sensor_range (+ obstacle radius) of the new centre, reverses again
    """

    kind = ItemKind.ROBOT

    def __init__(self,
                 item_id: int,
                 x: float,
                 y: float,
                 radius: float = DEFAULT_ROBOT_RADIUS,
                 heading: Optional[float] = None,
                 speed: Optional[float] = None,
                 sensor_range: float = SENSOR_RANGE,
                 whisker_length: float = WHISKER_LENGTH,
                 proximity_avoidance: bool = PROXIMITY_AVOIDANCE,
                 rng: Optional[np.random.Generator] = None):
        super().__init__(item_id, x, y, radius=radius, heading=heading, speed=speed,
                         sensor_range=sensor_range, whisker_length=whisker_length, rng=rng)
        self.proximity_avoidance = proximity_avoidance
        self.whisker_hit = False

    def tick(self, arena) -> None:
        self.whisker_hit = arena.intersects_any_obstacle(self.whisker())
        if self.whisker_hit:
            self.reverse()
        self.move_forward(arena)

    def move_forward(self, arena):
        """Advance along the heading, then resolve walls and proximity."""
        dx, dy = self.step_vector()
        self.x += dx
        self.y += dy

        self.bounce_off_walls(arena)

        if self.proximity_avoidance and arena.is_obstacle_nearby(self):
            self.reverse()
