"""Centralized constants for the debugmap utils package.

Single source of truth for paths, directories and environment variable
names used across utility modules.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Working directory for debugmap artifacts (config, error log)
DMAP_DIR = Path("./.dmap")

CONFIG_FILE = DMAP_DIR / "config.json"
ERROR_LOG_FILE = DMAP_DIR / "error.log"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "DEBUGMAP"
ENV_LOG_LEVEL = "DEBUGMAP_LOG_LEVEL"
ENV_LOG_JSON = "DEBUGMAP_LOG_JSON"
ENV_LOG_FILE = "DEBUGMAP_LOG_FILE"
