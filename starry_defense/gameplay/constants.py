"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.

These are the defaults behind GameSettings; override them there.
"""

# =============================================================================
# PLAYFIELD
# =============================================================================
PLAYFIELD_WIDTH = 800.0
PLAYFIELD_HEIGHT = 600.0
GROUND_Y = 550.0

# =============================================================================
# LAYOUT
# =============================================================================
# (x, y, max_ammo)
TURRET_LAYOUT = (
    (80.0, 550.0, 20),
    (400.0, 550.0, 40),
    (720.0, 550.0, 20),
)

# (x, y)
CITY_LAYOUT = (
    (180.0, 570.0),
    (260.0, 570.0),
    (340.0, 570.0),
    (460.0, 570.0),
    (540.0, 570.0),
    (620.0, 570.0),
)

# =============================================================================
# SPAWNING (milliseconds)
# =============================================================================
BASE_SPAWN_INTERVAL = 2000.0
SPAWN_INTERVAL_STEP = 200.0   # removed per level
MIN_SPAWN_INTERVAL = 500.0

# =============================================================================
# KINEMATICS (progress per tick)
# =============================================================================
BASE_ROCKET_SPEED = 0.0005
ROCKET_SPEED_STEP = 0.0002    # added per level
ROCKET_EPSILON = 0.001        # keeps the rocket step finite near progress 1
INTERCEPTOR_SPEED = 0.02

# =============================================================================
# EXPLOSIONS (per tick)
# =============================================================================
EXPLOSION_MAX_RADIUS = 40.0
EXPLOSION_EXPANSION_RATE = 2.0
EXPLOSION_CONTRACTION_RATE = 0.5
EXPLOSION_FADE_RATE = 0.02

# =============================================================================
# SCORING & PROGRESSION
# =============================================================================
TARGET_SCORE = 1000
KILL_REWARD = 20
MAX_LEVEL = 5
LEVEL_SCORE_STEP = 200        # level-up once score > level * step

# =============================================================================
# FRAME LOOP
# =============================================================================
FRAME_RATE = 60               # frames per second
