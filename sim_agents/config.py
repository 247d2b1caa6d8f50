# =============================================================================
# Sim Agents - Configuration
# =============================================================================
# Behaviour parameters for the robot variants. Base robot values (speed,
# whisker, sensor range, radius) are shared from sim_model.config.
# =============================================================================

# =============================================================================
# BEAM ROBOT
# =============================================================================
# Number of rays in the forward fan
BEAM_COUNT = 5

# Total field of view covered by the fan (degrees)
BEAM_SPREAD = 90.0

# Length of each ray (pixels)
BEAM_LENGTH = 100.0

# =============================================================================
# BUMP ROBOT
# =============================================================================
# Bump robots are slightly faster than the base robot (pixels/tick)
BUMP_SPEED = 3.0

# Ticks of recovery feedback after a contact
BUMP_RECOVERY_TICKS = 30

# Random deflection added on contact: uniform in [-JITTER, +JITTER] degrees
BUMP_DEFLECTION_JITTER = 15.0

# =============================================================================
# SMART ROBOT
# =============================================================================
SMART_SPEED = 2.5

# Sensor ring: one ray every 360 / SMART_SENSOR_COUNT degrees (world frame)
SMART_SENSOR_COUNT = 8
SMART_SENSOR_RANGE = 80.0

# Danger memory: added per collision in a sector, capped at SMART_MAX_DANGER
SMART_LEARNING_RATE = 0.1
SMART_MAX_DANGER = 1.0

# Half width of the cone in which sensors/memory affect a candidate (degrees)
SMART_INFLUENCE_ANGLE = 45.0

# Candidate headings are sampled every SMART_CANDIDATE_STEP degrees
SMART_CANDIDATE_STEP = 15

# Fraction of the gap to the safest heading turned per tick
SMART_TURN_GAIN = 0.1

# Minimum forward clearance (0..1) required to translate
SMART_CLEARANCE_THRESHOLD = 0.5

# Analysis mode: rotate in place for SMART_ANALYZE_DURATION seconds of
# simulated time, SMART_TICK_SECONDS per tick (~60 fps)
SMART_TICK_SECONDS = 0.016
SMART_ANALYZE_DURATION = 1.0
SMART_ANALYZE_TURN_RATE = 2.0

# Collisions during forward movement before analysis is forced
SMART_COLLISION_THRESHOLD = 3
