"""Lookups over a built UnitIndex.

Both directions are answered here:

- class location -> source location (stack traces, debugger stops)
- source location -> compiled unit (breakpoint placement)

Absence is never an error. An unknown class resolves to an empty path and
an unknown source location resolves to None.
"""

from typing import Iterable

from .models import CompiledUnit, DebugSourceLinePairs
from .unit_index import UnitIndex


class QueryEngine:
    """Read-only query surface; safe to share between threads once built."""

    def __init__(self, index: UnitIndex):
        self.index = index

    def find_sources_for_class(self, class_name: str) -> tuple[str, ...]:
        """All candidate source paths for a class, in registration order."""
        return self.index.source_paths(class_name)

    def find_source_for_class(self, class_name: str) -> str | None:
        """First registered candidate source path for a class.

        When a class maps to several paths the rest are ignored here; use
        find_sources_for_class() to disambiguate.
        """
        paths = self.index.source_paths(class_name)
        return paths[0] if paths else None

    def resolve_source_location(self, class_name: str, line: int) -> tuple[str, int]:
        """For the given (class name, line) pair, return the (source path, line) pair.

        The path is "" when the class is unknown.
        """
        source = self.find_source_for_class(class_name)
        return (source if source is not None else "", line)

    def resolve_source_locations(self, pairs: Iterable[tuple[str, int]]) -> DebugSourceLinePairs:
        """Resolve each (class name, line) pair, keeping order and count."""
        return DebugSourceLinePairs(
            tuple(self.resolve_source_location(class_name, line) for class_name, line in pairs)
        )

    def find_unit(
        self, source_name: str | None, line: int, package_prefix: str = ""
    ) -> CompiledUnit | None:
        """Return the unit whose bytecode corresponds to the given source location.

        Args:
            source_name: The source file name, without path information
            line: The source line
            package_prefix: A possibly incomplete prefix of the unit's package

        Returns:
            The first unit, in descending start-line order, whose line range
            contains ``line`` and whose package starts with ``package_prefix``;
            None if there is no such unit.
        """
        if source_name is None:
            return None
        for unit in self.index.units_for(source_name):
            if unit.contains(line) and unit.package_name.startswith(package_prefix):
                return unit
        return None
