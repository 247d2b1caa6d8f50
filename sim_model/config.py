# =============================================================================
# Sim Model - Configuration
# =============================================================================
# Shared parameters for the entity layer (geometry tolerances, default sizes
# and base robot sensing/motion values).
# =============================================================================

# =============================================================================
# ENTITY SIZES
# =============================================================================
# Bounding-circle radius of every robot variant (pixels)
DEFAULT_ROBOT_RADIUS = 20.0

# Half side of the square obstacle footprint (pixels)
DEFAULT_OBSTACLE_RADIUS = 15.0

# =============================================================================
# BASE ROBOT PARAMETERS
# =============================================================================
# Distance travelled per tick at 1.0x simulation speed (pixels/tick)
ROBOT_SPEED = 2.0

# Length of the forward "whisker" sensor line (pixels)
WHISKER_LENGTH = 40.0

# Extra clearance around the body used by the proximity check (pixels)
SENSOR_RANGE = 50.0

# Basic robots reverse again after moving if an obstacle is within range
PROXIMITY_AVOIDANCE = True

# =============================================================================
# ANGLES
# =============================================================================
# Headings are kept in degrees in [0, FULL_TURN)
FULL_TURN = 360.0
