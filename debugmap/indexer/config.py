"""Indexer configuration - constants and patterns.

This module contains ONLY configuration constants for the indexer package.
"""

import os

# =============================================================================
# PERFORMANCE CONFIGURATION
# =============================================================================


def _get_worker_count(env_var: str, default: int, max_value: int) -> int:
    """Get worker count from environment or use default."""
    try:
        value = int(os.environ.get(env_var, default))
        return max(1, min(value, max_value))
    except (ValueError, TypeError):
        return default


# Upper bound for parallel class-file extraction
MAX_JOBS = _get_worker_count("DEBUGMAP_MAX_JOBS", 16, 64)


# =============================================================================
# FILE SYSTEM CONFIGURATION
# =============================================================================

CLASS_FILE_SUFFIX = ".class"

DEFAULT_SOURCE_EXTENSIONS: tuple[str, ...] = (".scala", ".java")

# Directories never descended into while collecting source files.
# Compiled output is walked explicitly from the configured target, so build
# directories are skipped here.
SKIP_DIRS: set[str] = {
    # Version control
    ".git",
    ".hg",
    ".svn",

    # Build artifacts
    "target",
    "build",
    "out",
    ".bloop",
    ".metals",
    ".bsp",

    # Dependencies
    "node_modules",

    # Python caches
    "__pycache__",
    ".venv",
    "venv",
}
