"""Configuration constants for tilegrid-core.

This module contains the default values used when user configuration does
not override them.
"""

# Display defaults
DEFAULT_TILE_WIDTH = 243
DEFAULT_HORIZONTAL_SEPARATOR = 15
DEFAULT_VERTICAL_SEPARATOR = 15
DEFAULT_COLUMNS = 3

# Layout strategies
DEFAULT_APPEND_STRATEGY = "shortest_column"
DEFAULT_PREPEND_STRATEGY = "reverse_round_robin"

# Simulated content source
DEFAULT_SOURCE_TYPE = "simulated"
DEFAULT_NUM_TILES = 1000
MIN_TILE_HEIGHT_UNITS = 3
MAX_TILE_HEIGHT_UNITS = 15
PIXELS_PER_UNIT = 20
DEFAULT_SOURCE_LATENCY = 0.5  # seconds

# HTTP content source
DEFAULT_HTTP_BASE_URL = "http://localhost:8000"
DEFAULT_HTTP_ENDPOINT = "/api/v1/tiles"
DEFAULT_HTTP_TIMEOUT = 10.0

# Fetch coordination
DEFAULT_BUSY_DELAY = 0.1  # seconds before a contended caller gets Busy
DEFAULT_RETRY_INITIAL_DELAY = 0.1
DEFAULT_RETRY_MAX_DELAY = 5.0

# Viewport loading
DEFAULT_INITIAL_CHUNK = 10
DEFAULT_BUFFERED_PERCENTAGE = 1.0  # 1.0 buffers one screen above and below

# Logging
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "tilegrid_core.log"
DEFAULT_LOG_ROTATION = "10 MB"
DEFAULT_LOG_RETENTION = "1 week"
