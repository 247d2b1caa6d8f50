# =============================================================================
# Sim World - Scenario Presets
# =============================================================================
# Ready-made arena populations used by the runner and tests.
# =============================================================================

from typing import Dict, Optional

from sim_model import ItemKind

from .arena import Arena
from .config import (
    SCENARIO_OBSTACLES_COUNT,
    SCENARIO_MIXED_OBSTACLES,
    SCENARIO_MIXED_ROBOTS_PER_KIND,
    SCENARIO_PURSUIT_CHASERS,
    SCENARIO_PURSUIT_RUNNERS,
    SCENARIO_PURSUIT_OBSTACLES
)


def _populate(arena: Arena, counts: Dict[ItemKind, int]) -> Dict[str, int]:
    # Obstacles first so robots are placed around them
    ordered = sorted(counts.items(), key=lambda entry: entry[0].is_robot)
    placed = {}
    for kind, count in ordered:
        if count < 0:
            raise ValueError(f"count for {kind.value} must be >= 0, got {count}")
        for _ in range(count):
            arena.add_item(kind)
        placed[kind.value] = count
    return placed


class ScenarioPresets:
    """Presets for common arena set-ups. Each clears the arena first."""

    @staticmethod
    def scenario_empty(arena: Arena):
        arena.clear()
        return {'type': 'empty', 'counts': {}}

    @staticmethod
    def scenario_obstacles_only(arena: Arena, num_obstacles: int = SCENARIO_OBSTACLES_COUNT):
        arena.clear()
        counts = _populate(arena, {ItemKind.OBSTACLE: num_obstacles})
        return {'type': 'obstacles_only', 'counts': counts}

    @staticmethod
    def scenario_mixed(arena: Arena,
                       num_obstacles: int = SCENARIO_MIXED_OBSTACLES,
                       robots_per_kind: int = SCENARIO_MIXED_ROBOTS_PER_KIND):
        """One of every robot variant (by default) among scattered obstacles."""
        arena.clear()
        wanted = {kind: robots_per_kind for kind in ItemKind if kind.is_robot}
        wanted[ItemKind.OBSTACLE] = num_obstacles
        counts = _populate(arena, wanted)
        return {'type': 'mixed', 'counts': counts}

    @staticmethod
    def scenario_pursuit(arena: Arena,
                         num_chasers: int = SCENARIO_PURSUIT_CHASERS,
                         num_runners: int = SCENARIO_PURSUIT_RUNNERS,
                         num_obstacles: int = SCENARIO_PURSUIT_OBSTACLES):
        """Chasers hunting basic robots."""
        arena.clear()
        counts = _populate(arena, {
            ItemKind.OBSTACLE: num_obstacles,
            ItemKind.ROBOT: num_runners,
            ItemKind.CHASER_ROBOT: num_chasers,
        })
        return {'type': 'pursuit', 'counts': counts}

    @staticmethod
    def scenario_custom(arena: Arena, counts: Optional[Dict[ItemKind, int]] = None):
        """
        Populate with explicit per-kind counts.

        Args:
            arena: Arena to reset and fill
            counts: Number of items per kind (missing kinds get none)

        Raises:
            ValueError: If any count is negative
        """
        arena.clear()
        placed = _populate(arena, dict(counts or {}))
        return {'type': 'custom', 'counts': placed}


SCENARIOS = {
    'empty': ScenarioPresets.scenario_empty,
    'obstacles': ScenarioPresets.scenario_obstacles_only,
    'mixed': ScenarioPresets.scenario_mixed,
    'pursuit': ScenarioPresets.scenario_pursuit,
}
