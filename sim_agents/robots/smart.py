# =============================================================================
# Sim Agents - Smart Robot
# =============================================================================
# Sensor ring + directional danger memory. Picks the safest heading among
# sampled candidates, turns toward it gradually and stops to re-scan when
# the way ahead is blocked.
# =============================================================================

from typing import List

import numpy as np

from sim_model import ItemKind, Segment, angle_difference, ray_from
from sim_model.items import require_positive

from ..base import BaseRobot
from ..config import (
    SMART_SPEED,
    SMART_SENSOR_COUNT,
    SMART_SENSOR_RANGE,
    SMART_LEARNING_RATE,
    SMART_MAX_DANGER,
    SMART_INFLUENCE_ANGLE,
    SMART_CANDIDATE_STEP,
    SMART_TURN_GAIN,
    SMART_CLEARANCE_THRESHOLD,
    SMART_TICK_SECONDS,
    SMART_ANALYZE_DURATION,
    SMART_ANALYZE_TURN_RATE,
    SMART_COLLISION_THRESHOLD
)


def _angular_distance(angles: np.ndarray, angle: float) -> np.ndarray:
    """Unsigned shortest angular distance in [0, 180] (vectorized)."""
    return np.abs((angles - angle + 180.0) % 360.0 - 180.0)


class SmartRobot(BaseRobot):
    """
    Learning robot with an 8-ray sensor ring and danger memory.

    Sensors are fixed in the world frame (ray i at i * 45 degrees). The
    danger memory has one slot per sensor direction; every blocked forward
    move adds the learning rate to the slot nearest the heading, capped at
    1.0.

    Safety score of a candidate heading:
        prod over active sensors within 45 deg:  (1 - cos(diff)) / 2
      * prod over memory slots within 45 deg:    1 - danger * cos(diff)
    """

    kind = ItemKind.SMART_ROBOT
    default_speed = SMART_SPEED

    def __init__(self, *args,
                 sensor_count: int = SMART_SENSOR_COUNT,
                 ray_length: float = SMART_SENSOR_RANGE,
                 learning_rate: float = SMART_LEARNING_RATE,
                 **kwargs):
        super().__init__(*args, **kwargs)
        if sensor_count < 1:
            raise ValueError(f"sensor_count must be at least 1, got {sensor_count}")
        self.sensor_count = int(sensor_count)
        self.ray_length = require_positive("ray_length", ray_length)
        self.learning_rate = require_positive("learning_rate", learning_rate)

        self.sensor_angles = np.arange(self.sensor_count) * (360.0 / self.sensor_count)
        self.sensor_readings = np.zeros(self.sensor_count)
        self.danger_memory = np.zeros(self.sensor_count)

        self.collision_count = 0
        self.is_analyzing = False
        self.analyzing_timer = 0.0

    def tick(self, arena) -> None:
        self.update_sensors(arena)

        if self.is_analyzing:
            self.analyze_surroundings()
        else:
            self.move_smartly(arena)

        self.analyzing_timer += SMART_TICK_SECONDS

    # =========================================================================
    # Sensing
    # =========================================================================

    def sensor_rays(self) -> List[Segment]:
        return [ray_from(self.x, self.y, angle, self.ray_length) for angle in self.sensor_angles]

    def update_sensors(self, arena):
        """Refresh readings: 1.0 where the ray crosses an obstacle, else 0.0."""
        for idx, ray in enumerate(self.sensor_rays()):
            self.sensor_readings[idx] = 1.0 if arena.intersects_any_obstacle(ray) else 0.0

    def forward_clearance(self) -> float:
        """1.0 when the sensor nearest the heading is clear, 0.0 when blocked."""
        step = 360.0 / self.sensor_count
        forward = int(np.round(self.heading / step)) % self.sensor_count
        return 1.0 - float(self.sensor_readings[forward])

    # =========================================================================
    # Decision
    # =========================================================================

    def safety_score(self, angle: float) -> float:
        diffs = _angular_distance(self.sensor_angles, angle)
        near = diffs < SMART_INFLUENCE_ANGLE
        cosines = np.cos(np.deg2rad(diffs))

        active = near & (self.sensor_readings > 0)
        score = np.prod(((1.0 - cosines) * 0.5)[active])
        score *= np.prod((1.0 - self.danger_memory * cosines)[near])
        return float(score)

    def find_safest_heading(self) -> float:
        """Candidate heading with the highest safety score (first wins ties)."""
        candidates = np.arange(0, 360, SMART_CANDIDATE_STEP, dtype=float)
        scores = np.array([self.safety_score(angle) for angle in candidates])
        return float(candidates[int(np.argmax(scores))])

    # =========================================================================
    # Behaviour
    # =========================================================================

    def move_smartly(self, arena):
        safest = self.find_safest_heading()
        self.heading = self.heading + angle_difference(safest, self.heading) * SMART_TURN_GAIN

        clearance = self.forward_clearance()
        if clearance <= SMART_CLEARANCE_THRESHOLD:
            self.start_analysis()
            return

        dx, dy = self.step_vector(clearance)
        new_x = self.x + dx
        new_y = self.y + dy
        blocked = (arena.is_colliding(new_x, new_y, self.radius, exclude_id=self.id) or
                   self.moving_into_wall(arena, new_x, new_y, dx, dy))
        if blocked:
            self.handle_collision(self.heading)
        else:
            self.x = new_x
            self.y = new_y

    def analyze_surroundings(self):
        """Rotate in place until the analysis window has elapsed."""
        self.is_analyzing = self.analyzing_timer < SMART_ANALYZE_DURATION
        self.heading = self.heading + SMART_ANALYZE_TURN_RATE

    def start_analysis(self):
        self.is_analyzing = True
        self.analyzing_timer = 0.0

    def handle_collision(self, collision_heading: float):
        """Learn danger in the collision direction; force analysis on repeat hits."""
        self.collision_count += 1

        step = 360.0 / self.sensor_count
        slot = int(np.round(collision_heading / step)) % self.sensor_count
        self.danger_memory[slot] = min(SMART_MAX_DANGER,
                                       self.danger_memory[slot] + self.learning_rate)

        if self.collision_count >= SMART_COLLISION_THRESHOLD:
            self.start_analysis()
            self.collision_count = 0

    def get_state(self) -> dict:
        state = super().get_state()
        state['analyzing'] = self.is_analyzing
        state['danger_memory'] = self.danger_memory.copy()
        return state
