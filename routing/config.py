"""
Purpose: Constants for the routing engine (search budget, reconciliation, timing, defaults).
Dependencies: None.
Ext Hooks: Per-scene overrides.
"""

MODULE_NAME = "routing-token"

GRID_SIZE = 50  # Pixels per cell
MOVEMENT_FLAG = "routing_token_movement"  # Marks self-caused position updates

# Search budget: direct * DETOUR_FACTOR + DETOUR_BUFFER, capped by the user setting and the hard ceiling
DETOUR_FACTOR = 10
DETOUR_BUFFER = 10
HARD_SEARCH_CEILING = 300

RECONCILE_MAX_RADIUS = 5
EXECUTOR_START_DELAY = 0.01  # Seconds; lets the drop handler return before movement begins

# Setting defaults and ranges
DEFAULT_ENABLE_PATHFINDING = True
DEFAULT_AUTO_FOLLOW_PATH = True
DEFAULT_MAX_PATH_DISTANCE = 1000
MAX_PATH_DISTANCE_RANGE = (100, 5000, 100)  # min, max, step
DEFAULT_DEBUG_MODE = False

ORACLE_URL = "http://localhost:5000"
ORACLE_TIMEOUT = 5.0
