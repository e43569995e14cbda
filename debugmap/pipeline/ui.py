"""Central UI handler for dmap.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command.

Usage:
    from debugmap.pipeline.ui import console, print_error

    console.print("[success]Index built[/success]")
    print_error("Class output directory not found")
"""

import sys

from rich.console import Console
from rich.theme import Theme

DMAP_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=DMAP_THEME,
    force_terminal=sys.stdout.isatty(),
)


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[error]ERROR:[/error] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")
