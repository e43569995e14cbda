"""Indexer workflow runner."""

import time
from pathlib import Path
from typing import Any

from debugmap.config_runtime import load_runtime_config
from debugmap.utils.logging import logger

from .core import FileWalker
from .orchestrator import IndexerOrchestrator
from .query import QueryEngine


def _resolve(root: Path, value: str | Path) -> Path:
    path = Path(value)
    return path if path.is_absolute() else (root / path).resolve()


def run_debug_index(
    root_path: str = ".",
    target: str | None = None,
    source_roots: list[str] | None = None,
    jobs: int | None = None,
) -> tuple[QueryEngine, dict[str, Any]]:
    """Run the complete debug-index workflow.

    Explicit arguments win over the runtime configuration of ``root_path``.
    Relative paths are resolved against ``root_path``.

    Returns:
        Tuple of (query engine, statistics)
    """
    start_time = time.time()
    root = Path(root_path).resolve()

    if not root.exists():
        raise FileNotFoundError(f"Root path does not exist: {root_path}")

    config = load_runtime_config(str(root))
    target_dir = _resolve(root, target or config["paths"]["target"])
    roots = [_resolve(root, r) for r in (source_roots or config["paths"]["sources"])]
    jobs = jobs if jobs is not None else config["scan"]["jobs"]

    walker = FileWalker(max_class_size=config["limits"]["max_class_size"])
    source_files = walker.walk_source_files(roots, config["scan"]["source_extensions"])
    logger.debug(f"Registered {len(source_files)} source files from {len(roots)} roots")

    orchestrator = IndexerOrchestrator(
        target=target_dir,
        source_files=source_files,
        jobs=jobs,
        walker=walker,
    )
    engine, stats = orchestrator.index()

    stats["target"] = str(target_dir)
    stats["source_roots"] = [str(r) for r in roots]
    stats["elapsed"] = time.time() - start_time
    return engine, stats
