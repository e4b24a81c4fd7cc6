# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
Physics defaults are used when config.json omits a parameter; the
visualization settings control how the renderer draws the ensemble.
"""

# --- Lorenz System Defaults ---
# Classical chaotic regime.
DEFAULT_SIGMA = 10.0
DEFAULT_RHO = 28.0
DEFAULT_BETA = 8.0 / 3.0
DEFAULT_DT = 0.002

# --- Ensemble Defaults ---
DEFAULT_PARTICLE_COUNT = 100
DEFAULT_TRAIL_CAPACITY = 200
# Initial positions are sampled uniformly in a cube of this half-width.
DEFAULT_SPAWN_HALF_WIDTH = 10.0
DEFAULT_SPAWN_CENTER = (0.0, 0.0, 0.0)
# Scale constant k in ceil(sqrt(|v|) * k).
DEFAULT_VISIBLE_SCALE = 10.0

# Visualization settings
# Set to True to run in borderless fullscreen mode.
FULLSCREEN = False
WINDOW_SIZE = (1500, 800)
UI_PANEL_WIDTH = 280
FPS = 60
BACKGROUND_COLOR = (12, 12, 16)
PARTICLE_COLOR = (22, 224, 134)
PARTICLE_RADIUS = 2

# --- Camera ---
# Attractor coordinates are scaled by this many pixels per unit.
DEFAULT_CAMERA_SCALE = 9.0
# The lobes of the attractor sit around z = rho - 1.
CAMERA_FOCUS = (0.0, 0.0, 25.0)
CAMERA_DRAG_SENSITIVITY = 0.01
CAMERA_ZOOM_STEP = 1.1

# --- Trails ---
# Fraction of the way a trail's oldest segment is blended to the background.
TRAIL_FADE = 0.9
# Saturation and lightness (percent) of per-particle trail hues.
TRAIL_SATURATION = 100
TRAIL_LIGHTNESS = 50

# How many particles the UP/DOWN keys add or remove.
PARTICLE_COUNT_STEP = 10
