"""The two derived mappings behind every query.

UnitIndex keeps

- qualified class name -> candidate source paths (append-only), and
- bare source name -> compiled units, ordered by descending start line.

The descending order lets a first-match scan pick the most deeply nested
unit when several units of one file contain a line: inner declarations
start later than the declaration enclosing them. Sibling declarations with
overlapping spans defeat this heuristic; that is a known limitation.
"""

import bisect

from .models import CompiledUnit
from .registry import SourceRegistry


def _descending_start(unit: CompiledUnit) -> int:
    return -unit.start_line


class UnitIndex:
    """Mutable during the build pass, read-only afterwards."""

    def __init__(self):
        self.class_name_to_source_paths: dict[str, list[str]] = {}
        self.source_name_to_units: dict[str | None, list[CompiledUnit]] = {}

    def add_unit(self, unit: CompiledUnit, registry: SourceRegistry) -> None:
        """Register a committed unit.

        Every path the registry knows for the unit's source name becomes a
        candidate for its class, and the unit joins its source name's list at
        the position that keeps start lines descending. A unit whose start
        line equals existing ones goes after them.
        """
        candidates = registry.paths_for(unit.source_name)
        if candidates:
            paths = self.class_name_to_source_paths.get(unit.qualified_name)
            if paths is None:
                paths = []
                self.class_name_to_source_paths[unit.qualified_name] = paths
            paths.extend(candidates)

        units = self.source_name_to_units.get(unit.source_name)
        if units is None:
            units = []
            self.source_name_to_units[unit.source_name] = units
        position = bisect.bisect_right(units, -unit.start_line, key=_descending_start)
        units.insert(position, unit)

    def source_paths(self, class_name: str) -> tuple[str, ...]:
        return tuple(self.class_name_to_source_paths.get(class_name, ()))

    def units_for(self, source_name: str | None) -> tuple[CompiledUnit, ...]:
        return tuple(self.source_name_to_units.get(source_name, ()))

    @property
    def unit_count(self) -> int:
        return sum(len(units) for units in self.source_name_to_units.values())

    @property
    def class_count(self) -> int:
        return len(self.class_name_to_source_paths)
