"""
Configuration constants for the shortest-path visualizer.

Playback timing and logging settings live here.  Values can be
overridden with environment variables.
"""

import os

# =============================================================================
# Playback Configuration
# =============================================================================

# Seconds between automatic steps at speed 1.0
BASE_STEP_INTERVAL = float(os.getenv("PLAYBACK_BASE_INTERVAL", "0.8"))

# Speed multiplier a freshly created stepper starts with
DEFAULT_SPEED = 1.0

# Upper bound accepted by Stepper.set_speed (lower bound is exclusive 0)
MAX_SPEED = 5.0

# =============================================================================
# Logging Configuration
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
