"""Configuration defaults for the star layout service."""

import os

# Flask server
HOST = os.environ.get("SPANGLED_HOST", "127.0.0.1")
PORT = int(os.environ.get("SPANGLED_PORT", "5050"))
DEBUG = os.environ.get("SPANGLED_DEBUG", "0").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.environ.get("SPANGLED_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Request limits: the search examines O(n_stars) candidates per request
MAX_STARS = int(os.environ.get("SPANGLED_MAX_STARS", "10000"))
MAX_STRIPES = int(os.environ.get("SPANGLED_MAX_STRIPES", "99"))
