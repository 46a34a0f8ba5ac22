"""Configuration for the part matching core and its MCP server."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))

# Tool input limits
MAX_MPN_LENGTH = 100
MAX_CANDIDATES = 200
MAX_SPECS = 50

# Scoring defaults
DEFAULT_PROFILE = os.getenv("PARTMATCH_DEFAULT_PROFILE", "REPLACEMENT")
ACCEPT_THRESHOLD = float(os.getenv("PARTMATCH_ACCEPT_THRESHOLD", "0.7"))
PERCENT_DECAY_FACTOR = float(os.getenv("PARTMATCH_PERCENT_DECAY", "1.5"))  # Score hits 0 at factor * p%

# Minimum-required rule: candidates within this ratio of the reference get NEAR_MINIMUM_SCORE
NEAR_MINIMUM_RATIO = 0.9
NEAR_MINIMUM_SCORE = 0.8

# Maximum-allowed rule: score at the m * reference boundary
MAXIMUM_ALLOWED_FLOOR = 0.7
