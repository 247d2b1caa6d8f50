# =============================================================================
# Sim Agents - Chaser Robot
# =============================================================================
# Pursues the nearest robot that is not itself a chaser.
# =============================================================================

import math
from typing import Optional

from sim_model import ItemKind, normalize_heading

from ..base import BaseRobot
from .basic import Robot


class ChaserRobot(Robot):
    """
    Robot that steps straight toward the nearest non-chaser robot.

    The target is recomputed every tick and only its id is kept, so a deleted
    target simply resolves to None. Without a target the chaser holds its
    position and only applies the wall reflection to its heading.
    """

    kind = ItemKind.CHASER_ROBOT

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.target_id: Optional[int] = None

    def find_target(self, arena) -> Optional[BaseRobot]:
        """Nearest robot excluding self and other chasers; ties keep the first."""
        nearest = None
        min_distance = math.inf
        for robot in arena.robots():
            if robot is self or isinstance(robot, ChaserRobot):
                continue
            distance = self.distance_to(robot)
            if distance < min_distance:
                min_distance = distance
                nearest = robot
        return nearest

    def target(self, arena) -> Optional[BaseRobot]:
        if self.target_id is None:
            return None
        return arena.get_item(self.target_id)

    def tick(self, arena) -> None:
        target = self.find_target(arena)
        self.target_id = target.id if target is not None else None

        if target is None:
            self.bounce_off_walls(arena)
            return

        dx = target.x - self.x
        dy = target.y - self.y
        distance = math.hypot(dx, dy)

        if distance > 0:
            self.heading = normalize_heading(math.degrees(math.atan2(dy, dx)))
            new_x = self.x + dx / distance * self.speed
            new_y = self.y + dy / distance * self.speed

            # Abandon the step if it would overlap the target or anything else
            if not arena.is_colliding(new_x, new_y, self.radius, exclude_id=self.id):
                self.x = new_x
                self.y = new_y

        self.bounce_off_walls(arena)
