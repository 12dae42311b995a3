"""
Centralized Editor Constants: Single source of truth for the booth planner.

Exposes consistent constants for:
  - Grid snapping
  - Default booth and pillar sizes
  - Viewport zoom limits and wheel intensities
  - Keyboard nudge steps and duplicate offset
  - Polygon drawing tolerances
  - Real-world scale conversion

The geometry engine, the interaction reducer and the export services
import from this module instead of defining their own numbers.
"""

# ===========================================================================
# GRID
# ===========================================================================

GRID_SIZE = 5  # world units per snapping step

# ===========================================================================
# DEFAULT ZONE SIZES (world units)
# ===========================================================================

DEFAULT_BOOTH_W = 200
DEFAULT_BOOTH_H = 200
DEFAULT_PILLAR_W = 40
DEFAULT_PILLAR_H = 40

BOOTH_LABEL_PREFIX = "B"

DEFAULT_BOOTH_FONT_COLOR = "#334155"
DEFAULT_PILLAR_FONT_COLOR = "#ffffff"
DEFAULT_PILLAR_FONT_SIZE = 12

# New zones spawn under this screen point, never left/above this world point
SPAWN_SCREEN_POINT = (100.0, 100.0)
SPAWN_MIN_WORLD = 100.0

# ===========================================================================
# VIEWPORT
# ===========================================================================

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0

VIEW_ZOOM_INTENSITY = 0.1
BACKGROUND_ZOOM_INTENSITY = 0.05

# ===========================================================================
# INTERACTION
# ===========================================================================

NUDGE_STEP = 1
NUDGE_STEP_FAST = 10

DUPLICATE_OFFSET = 10

# Clicking within this many screen pixels of the first vertex closes a polygon
CLOSE_LOOP_TOLERANCE_PX = 10

MIN_POLYGON_POINTS = 3

# ===========================================================================
# REAL-WORLD SCALE
# ===========================================================================

DEFAULT_SCALE_RATIO = 10.0  # centimeters per world unit
CM2_PER_M2 = 10000.0
CM_PER_M = 100.0

# ===========================================================================
# EXPORT
# ===========================================================================

EXPORT_PADDING = 50
EXPORT_TARGET_WIDTH = 1024
EMPTY_EXPORT_BOUNDS = (0.0, 0.0, 800.0, 600.0)
MIN_LABEL_FONT_SIZE = 14
WALL_THICKNESS = 6
