# =============================================================================
# Sim Agents - Beam Robot
# =============================================================================
# Forward fan of ray sensors; steers to the first clear ray.
# =============================================================================

from typing import List, Optional

import numpy as np

from sim_model import ItemKind, Segment, heading_vector
from sim_model.items import require_positive

from ..config import BEAM_COUNT, BEAM_SPREAD, BEAM_LENGTH
from .basic import Robot


class BeamRobot(Robot):
    """
    Robot with a fan of beam sensors spread evenly across its field of view.

    Beam i points at heading - spread/2 + i * spread/(count-1), so index 0 is
    the leftmost ray in scan order. If any beam is blocked the heading snaps
    to the first clear beam; if all are blocked the robot reverses. Movement
    then follows the basic robot.
    """

    kind = ItemKind.BEAM_ROBOT

    def __init__(self, *args,
                 beam_count: int = BEAM_COUNT,
                 beam_spread: float = BEAM_SPREAD,
                 beam_length: float = BEAM_LENGTH,
                 **kwargs):
        super().__init__(*args, **kwargs)
        if beam_count < 2:
            raise ValueError(f"beam_count must be at least 2, got {beam_count}")
        self.beam_count = int(beam_count)
        self.beam_spread = require_positive("beam_spread", beam_spread)
        self.beam_length = require_positive("beam_length", beam_length)

        self.beams: List[Segment] = [Segment(self.x, self.y, self.x, self.y)
                                     for _ in range(self.beam_count)]
        self.beam_hits: List[bool] = [False] * self.beam_count

    def beam_angles(self) -> np.ndarray:
        half = self.beam_spread / 2
        return np.linspace(self.heading - half, self.heading + half, self.beam_count)

    def update_beams(self):
        """Re-aim the cached beam segments from the current pose."""
        for beam, angle in zip(self.beams, self.beam_angles()):
            direction = heading_vector(angle)
            beam.set(self.x, self.y,
                     self.x + self.beam_length * direction[0],
                     self.y + self.beam_length * direction[1])

    def find_clearest_beam(self) -> Optional[int]:
        """Index of the first unblocked beam, or None if all are blocked."""
        for idx, hit in enumerate(self.beam_hits):
            if not hit:
                return idx
        return None

    def tick(self, arena) -> None:
        self.update_beams()
        self.beam_hits = [arena.intersects_any_obstacle(beam) for beam in self.beams]

        if any(self.beam_hits):
            clearest = self.find_clearest_beam()
            if clearest is None:
                self.reverse()
            else:
                self.heading = self.beam_angles()[clearest]

        super().tick(arena)
