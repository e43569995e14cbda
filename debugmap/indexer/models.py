"""Data model for the debug index."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

# Range sentinels for a unit that never saw a line-number marker.
# start > end, so the range is empty and contains no line.
UNSET_START_LINE = sys.maxsize
UNSET_END_LINE = -sys.maxsize - 1


def package_of(qualified_name: str) -> str:
    """Return the container prefix of a dotted name ('' for the default package)."""
    package, _, _ = qualified_name.rpartition(".")
    return package


@dataclass(frozen=True)
class CompiledUnit:
    """One type declaration found inside one class file."""

    start_line: int
    end_line: int
    class_file: Path
    source_name: str | None
    package_name: str
    qualified_name: str

    @property
    def has_line_info(self) -> bool:
        return self.start_line <= self.end_line

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_line": self.start_line if self.has_line_info else None,
            "end_line": self.end_line if self.has_line_info else None,
            "class_file": str(self.class_file),
            "source_name": self.source_name,
            "package_name": self.package_name,
            "qualified_name": self.qualified_name,
        }


@dataclass(frozen=True)
class DebugSourceLinePairs:
    """Resolved (source_path, line) pairs, in the order they were requested."""

    pairs: tuple[tuple[str, int], ...]

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __getitem__(self, index: int) -> tuple[str, int]:
        return self.pairs[index]
