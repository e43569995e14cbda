"""Indexer orchestrator - coordinates a single build pass.

Per-file extraction never touches the shared index. Units are collected
per file and folded into the UnitIndex by one aggregation loop, in sorted
file order, so a parallel build yields exactly the same index as a
sequential one.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

from debugmap.utils.logging import logger

from .config import MAX_JOBS
from .core import FileWalker
from .extractor import extract_units
from .models import CompiledUnit
from .query import QueryEngine
from .registry import SourceRegistry
from .unit_index import UnitIndex

# Outcome of extracting one file: its units, or the error that stopped it
_FileResult = tuple[Path, list[CompiledUnit] | None, Exception | None]


def _extract_safely(class_file: Path) -> _FileResult:
    try:
        return class_file, extract_units(class_file), None
    except Exception as e:  # any failure skips just this file
        return class_file, None, e


class IndexerOrchestrator:
    """Builds the debug index for one project."""

    def __init__(
        self,
        target: Path,
        source_files: Iterable[str | Path] = (),
        jobs: int = 1,
        walker: FileWalker | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            target: Root of the compiled class output
            source_files: Resolved source file paths for the source registry
            jobs: Number of threads used for extraction (1 = sequential)
            walker: FileWalker to enumerate class files with
        """
        self.target = Path(target)
        self.registry = SourceRegistry(source_files)
        self.jobs = max(1, min(jobs, MAX_JOBS))
        self.walker = walker or FileWalker()

    def _extract_all(self, class_files: list[Path]) -> Iterable[_FileResult]:
        if self.jobs == 1 or len(class_files) < 2:
            return map(_extract_safely, class_files)
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            # map() yields in submission order
            return list(pool.map(_extract_safely, class_files))

    def index(self) -> tuple[QueryEngine, dict[str, Any]]:
        """Scan the class output and build the query engine.

        Returns:
            Tuple of (query engine, statistics)
        """
        class_files = self.walker.walk_class_files(self.target)
        unit_index = UnitIndex()
        stats: dict[str, Any] = {
            "class_files": len(class_files),
            "processed": 0,
            "skipped": 0,
            "units": 0,
            "classes": 0,
            "source_files": len(self.registry),
            "errors": [],
        }

        for class_file, units, error in self._extract_all(class_files):
            if error is not None:
                logger.opt(exception=error).error(f"Error reading class file {class_file}: {error}")
                stats["skipped"] += 1
                stats["errors"].append({"path": str(class_file), "error": str(error)})
                continue

            for unit in units:
                unit_index.add_unit(unit, self.registry)
                if unit.source_name is None:
                    logger.debug(f"{unit.qualified_name} declares no source file")
            stats["processed"] += 1
            stats["units"] += len(units)

        stats["classes"] = unit_index.class_count
        logger.info(f"Finished parsing {len(class_files)} class files.")
        if stats["skipped"]:
            logger.warning(f"Skipped {stats['skipped']} unreadable class files")

        return QueryEngine(unit_index), stats
