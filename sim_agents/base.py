# =============================================================================
# Sim Agents - Base Robot
# =============================================================================
# Abstract base class with the state and helpers shared by all variants:
# heading normalization, speed scaling, whisker construction, wall
# reflection and bounds checks.
# =============================================================================

import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from sim_model import ArenaItem, Segment, normalize_heading, heading_vector, ray_from
from sim_model.items import require_positive
from sim_model.config import (
    DEFAULT_ROBOT_RADIUS,
    ROBOT_SPEED,
    SENSOR_RANGE,
    WHISKER_LENGTH
)


class BaseRobot(ArenaItem, ABC):
    """
    Abstract base class for all mobile arena items.

    Provides common functionality:
    - Heading kept in [0, 360) on every assignment
    - Base speed and simulation speed multiplier
    - Whisker and heading vector helpers
    - Wall reflection / clamping and wall-contact tests

    Subclasses must implement tick() with their sensing and movement policy.
    The arena argument is the owning Arena; robots only use its query surface
    (width, height, items, robots(), is_colliding(), intersects_any_obstacle(),
    is_obstacle_nearby(), get_item()).
    """

    default_speed = ROBOT_SPEED

    def __init__(self,
                 item_id: int,
                 x: float,
                 y: float,
                 radius: float = DEFAULT_ROBOT_RADIUS,
                 heading: Optional[float] = None,
                 speed: Optional[float] = None,
                 sensor_range: float = SENSOR_RANGE,
                 whisker_length: float = WHISKER_LENGTH,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize base robot.

        Args:
            item_id: Unique id assigned by the arena
            x, y: Centre position
            radius: Bounding-circle radius
            heading: Initial heading in degrees (random if None)
            speed: Base speed per tick (class default if None)
            sensor_range: Clearance used by proximity checks
            whisker_length: Length of the forward whisker line
            rng: Random generator (a fresh one if None)

        Raises:
            ValueError: On non-positive radius, speed or sensor lengths
        """
        super().__init__(item_id, x, y, radius)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.base_speed = require_positive("speed", self.default_speed if speed is None else speed)
        self.speed_multiplier = 1.0
        self.speed = self.base_speed
        self.sensor_range = require_positive("sensor_range", sensor_range)
        self.whisker_length = require_positive("whisker_length", whisker_length)

        self._heading = 0.0
        self.heading = self.rng.uniform(0.0, 360.0) if heading is None else heading

    @abstractmethod
    def tick(self, arena) -> None:
        """Sense, decide and move once."""

    # =========================================================================
    # Heading / speed
    # =========================================================================

    @property
    def heading(self) -> float:
        return self._heading

    @heading.setter
    def heading(self, value: float):
        self._heading = normalize_heading(value)

    def reverse(self):
        self.heading = self._heading + 180.0

    def direction(self) -> np.ndarray:
        return heading_vector(self._heading)

    def set_speed_multiplier(self, multiplier: float):
        self.speed_multiplier = require_positive("multiplier", multiplier)
        self.speed = self.base_speed * self.speed_multiplier

    def set_base_speed(self, speed: float):
        """Change this robot's own speed; the simulation multiplier still applies."""
        self.base_speed = require_positive("speed", speed)
        self.speed = self.base_speed * self.speed_multiplier

    # =========================================================================
    # Sensors
    # =========================================================================

    def whisker(self) -> Segment:
        return ray_from(self.x, self.y, self._heading, self.whisker_length)

    # =========================================================================
    # Walls
    # =========================================================================

    def bounce_off_walls(self, arena) -> bool:
        """
        Reflect the heading off any wall the body touches and clamp inside.

        x walls use 180 - heading, y walls 360 - heading. A wall only
        reflects a heading that points into it, so a robot already turned
        back is not flipped again on the next tick.

        Returns:
            True if any wall was touched
        """
        r = self.radius
        max_x = arena.width - r
        max_y = arena.height - r
        vx, vy = self.direction()
        touched = False

        if self.x <= r or self.x >= max_x:
            if (self.x <= r and vx < 0) or (self.x >= max_x and vx > 0):
                self.heading = 180.0 - self._heading
            self.x = float(np.clip(self.x, r, max_x))
            touched = True

        if self.y <= r or self.y >= max_y:
            if (self.y <= r and vy < 0) or (self.y >= max_y and vy > 0):
                self.heading = 360.0 - self._heading
            self.y = float(np.clip(self.y, r, max_y))
            touched = True

        return touched

    def moving_into_wall(self, arena, x: float, y: float, dx: float, dy: float) -> bool:
        """True if a body centred at (x, y) moving by (dx, dy) presses into a wall."""
        r = self.radius
        return ((x <= r and dx < 0) or (x >= arena.width - r and dx > 0) or
                (y <= r and dy < 0) or (y >= arena.height - r and dy > 0))

    def get_state(self) -> dict:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'position': (self.x, self.y),
            'heading': self._heading,
            'speed': self.speed
        }

    def step_vector(self, scale: float = 1.0) -> Tuple[float, float]:
        step = self.direction() * self.speed * scale
        return float(step[0]), float(step[1])
