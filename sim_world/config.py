# =============================================================================
# Sim World - Configuration
# =============================================================================
# Arena defaults, placement policy and scenario presets.
# =============================================================================

# =============================================================================
# ARENA DIMENSIONS
# =============================================================================
# Default arena size (pixels)
DEFAULT_ARENA_WIDTH = 800.0
DEFAULT_ARENA_HEIGHT = 600.0

# =============================================================================
# PLACEMENT
# =============================================================================
# Random samples tried when placing a new item before falling back to the
# sample with the most clearance
PLACEMENT_MAX_ATTEMPTS = 1000

# =============================================================================
# SIMULATION SPEED
# =============================================================================
# Multiplier applied to every robot's base speed
DEFAULT_SPEED_MULTIPLIER = 1.0

# =============================================================================
# SCENARIO CONFIGURATION
# =============================================================================

# --- Obstacles only ---
SCENARIO_OBSTACLES_COUNT = 12

# --- Mixed: one of every robot variant among obstacles ---
SCENARIO_MIXED_OBSTACLES = 8
SCENARIO_MIXED_ROBOTS_PER_KIND = 1

# --- Pursuit: chasers hunting basic robots ---
SCENARIO_PURSUIT_CHASERS = 2
SCENARIO_PURSUIT_RUNNERS = 4
SCENARIO_PURSUIT_OBSTACLES = 4
