# =============================================================================
# Sim Agents - Bump Robot
# =============================================================================
# Purely reactive contact sensor: try the full step, roll back on contact
# and turn around with a little randomness.
# =============================================================================

import math
from typing import Optional

from sim_model import ItemKind

from ..base import BaseRobot
from ..config import (
    BUMP_SPEED,
    BUMP_RECOVERY_TICKS,
    BUMP_DEFLECTION_JITTER
)


class BumpRobot(BaseRobot):
    """
    Robot that only knows it hit something after trying to move.

    A contact is any overlap with another item after the step, or a wall the
    step pushes into. On contact the position is rolled back to the pre-step
    value and the recovery cooldown restarts. For an item the new heading is
    the angle from the item to this robot plus 180 degrees (+/- jitter); for a
    wall it is the current heading plus 180 degrees (+/- jitter).
    """

    kind = ItemKind.BUMP_ROBOT
    default_speed = BUMP_SPEED

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cooldown = 0
        self.in_contact = False
        self.contact_count = 0

    @property
    def recovering(self) -> bool:
        """Visual feedback state, active while the cooldown runs."""
        return self.cooldown > 0

    def tick(self, arena) -> None:
        if self.cooldown > 0:
            self.cooldown -= 1

        old_x, old_y = self.x, self.y
        dx, dy = self.step_vector()
        self.x = old_x + dx
        self.y = old_y + dy

        self.in_contact = False
        collision_angle = self._find_item_contact(arena)
        if collision_angle is not None:
            self._handle_collision(old_x, old_y, collision_angle + 180.0)
        elif self.moving_into_wall(arena, self.x, self.y, dx, dy):
            self._handle_collision(old_x, old_y, self.heading + 180.0)

    def _find_item_contact(self, arena) -> Optional[float]:
        """
        Angle (degrees) from the first overlapping item to this robot.

        Returns:
            Collision angle, or None when the stepped position is clear
        """
        for item in arena.items:
            if item is self:
                continue
            if math.hypot(self.x - item.x, self.y - item.y) < self.radius + item.radius:
                return math.degrees(math.atan2(self.y - item.y, self.x - item.x))
        return None

    def _handle_collision(self, old_x: float, old_y: float, escape_heading: float):
        self.x = old_x
        self.y = old_y
        self.in_contact = True
        self.contact_count += 1
        self.cooldown = BUMP_RECOVERY_TICKS
        jitter = self.rng.uniform(-BUMP_DEFLECTION_JITTER, BUMP_DEFLECTION_JITTER)
        self.heading = escape_heading + jitter

    def describe(self) -> str:
        return super().describe() + (" [COLLISION]" if self.in_contact else "")
