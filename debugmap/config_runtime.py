"""Runtime configuration for debugmap - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from debugmap.utils.constants import CONFIG_FILE, ENV_PREFIX
from debugmap.utils.logging import logger

DEFAULTS = {
    "paths": {
        "target": "./target/classes",
        "sources": ["./src/main/scala", "./src/main/java"],
    },
    "scan": {
        "source_extensions": [".scala", ".java"],
        "jobs": 1,
    },
    "limits": {
        "max_class_size": 16 * 1024 * 1024,
    },
}


def _coerce(value: str, default_value: Any) -> Any:
    """Convert an environment string to the type of the default it overrides."""
    if isinstance(default_value, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, float):
        return float(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .dmap/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (DEBUGMAP_<SECTION>_<KEY>)
    2. .dmap/config.json file
    3. Built-in defaults

    Unknown keys and values whose type does not match the default are ignored.

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                try:
                    cfg[section][key] = _coerce(os.environ[env_var], cfg[section][key])
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {os.environ[env_var]!r}")

    return cfg
