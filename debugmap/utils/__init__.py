"""debugmap utilities package."""

from .constants import CONFIG_FILE, DMAP_DIR, ERROR_LOG_FILE
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger, set_log_level

__all__ = [
    "DMAP_DIR",
    "CONFIG_FILE",
    "ERROR_LOG_FILE",
    "handle_exceptions",
    "ExitCodes",
    "logger",
    "set_log_level",
]
