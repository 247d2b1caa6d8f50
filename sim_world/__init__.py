# =============================================================================
# Sim World Package
# =============================================================================
# Arena layer for the robot arena simulation.
#
# Responsibilities:
# - Item ownership, id allocation and random non-overlapping placement
# - Collision and sensor queries used by the robots
# - Selection / hover tracking that survives deletion
# - Tick scheduling and simulation speed
# - Text snapshot save/load and file storage
# - Scenario presets
#
# Usage:
#   from sim_world import Arena, ScenarioPresets
#   arena = Arena(width=800, height=600, seed=42)
#   ScenarioPresets.scenario_mixed(arena)
#   for _ in range(100):
#       arena.move_all()
#   text = arena.save()
# =============================================================================

from .arena import Arena, LoadReport, default_radius
from .scenarios import ScenarioPresets, SCENARIOS
from .storage import (
    write_text_file,
    append_text_file,
    read_text_file,
    delete_text_file
)

# Re-export config for convenience
from .config import (
    DEFAULT_ARENA_WIDTH,
    DEFAULT_ARENA_HEIGHT,
    PLACEMENT_MAX_ATTEMPTS
)

__all__ = [
    # Arena
    'Arena',
    'LoadReport',
    'default_radius',

    # Scenarios
    'ScenarioPresets',
    'SCENARIOS',

    # Storage
    'write_text_file',
    'append_text_file',
    'read_text_file',
    'delete_text_file',

    # Config exports
    'DEFAULT_ARENA_WIDTH',
    'DEFAULT_ARENA_HEIGHT',
    'PLACEMENT_MAX_ATTEMPTS',
]

__version__ = '1.0.0'
