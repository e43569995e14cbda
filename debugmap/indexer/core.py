"""Core functionality for file system operations.

This module contains the FileWalker class that enumerates compiled class
files under the build output root and source files under the source roots.
"""


import os
from pathlib import Path
from typing import Iterable

from debugmap.utils.logging import logger
from .config import CLASS_FILE_SUFFIX, DEFAULT_SOURCE_EXTENSIONS, SKIP_DIRS


def is_hidden(name: str) -> bool:
    """Dot-prefixed names are hidden."""
    return name.startswith(".")


class FileWalker:
    """Handles directory walking for class files and source files."""

    def __init__(self, max_class_size: int | None = None):
        """Initialize the file walker.

        Args:
            max_class_size: Class files larger than this many bytes are skipped
        """
        self.max_class_size = max_class_size

        # Stats tracking
        self.stats = {
            "class_files": 0,
            "large_files": 0,
            "source_files": 0,
            "skipped_dirs": 0,
        }

    def _walk(self, root: Path, skip_dirs: set[str]) -> Iterable[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            kept = [d for d in dirnames if not is_hidden(d) and d not in skip_dirs]
            self.stats["skipped_dirs"] += len(dirnames) - len(kept)
            dirnames[:] = kept

            for filename in filenames:
                if is_hidden(filename):
                    continue
                yield Path(dirpath) / filename

    def walk_class_files(self, target: Path) -> list[Path]:
        """Collect every non-hidden .class file under ``target``.

        Returns:
            Sorted list of absolute class file paths (empty if target is not a directory)
        """
        target = Path(target)
        if not target.is_dir():
            logger.warning(f"Class output directory not found: {target}")
            return []

        files = []
        for file in self._walk(target.resolve(), set()):
            if file.suffix != CLASS_FILE_SUFFIX:
                continue
            if self.max_class_size is not None:
                try:
                    if file.stat().st_size > self.max_class_size:
                        self.stats["large_files"] += 1
                        logger.warning(f"Skipping oversized class file: {file}")
                        continue
                except OSError:
                    # Vanished between listing and stat; extraction reports it
                    pass
            files.append(file)

        files.sort()
        self.stats["class_files"] = len(files)
        return files

    def walk_source_files(
        self,
        roots: Iterable[Path],
        extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
    ) -> list[Path]:
        """Collect source files under each root, in root order then path order.

        A root that is itself a file is taken as-is when its extension matches.
        Missing roots are logged and skipped.
        """
        wanted = {ext if ext.startswith(".") else f".{ext}" for ext in extensions}
        files: list[Path] = []
        for root in roots:
            root = Path(root)
            if root.is_file():
                if root.suffix in wanted:
                    files.append(root.resolve())
                continue
            if not root.is_dir():
                logger.warning(f"Source root not found: {root}")
                continue
            found = [f for f in self._walk(root.resolve(), SKIP_DIRS) if f.suffix in wanted]
            files.extend(sorted(found))

        self.stats["source_files"] = len(files)
        return files
