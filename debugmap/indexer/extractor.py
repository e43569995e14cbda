"""Bytecode unit extraction.

Turns the visitor events of one class file into CompiledUnit records. The
in-progress state of a type declaration lives in a UnitAccumulator and only
becomes a CompiledUnit at the end-of-unit event, so nothing half-built ever
leaves this module.
"""

from dataclasses import dataclass
from pathlib import Path

from debugmap.classfile import ClassReader, ClassVisitor, MethodVisitor
from debugmap.utils.logging import logger

from .models import UNSET_END_LINE, UNSET_START_LINE, CompiledUnit, package_of


@dataclass
class UnitAccumulator:
    """Running state for the type declaration currently being visited."""

    qualified_name: str
    source_name: str | None = None
    start_line: int = UNSET_START_LINE
    end_line: int = UNSET_END_LINE

    def add_line(self, line: int) -> None:
        self.start_line = min(self.start_line, line)
        self.end_line = max(self.end_line, line)

    def commit(self, class_file: Path) -> CompiledUnit:
        return CompiledUnit(
            start_line=self.start_line,
            end_line=self.end_line,
            class_file=class_file,
            source_name=self.source_name,
            package_name=package_of(self.qualified_name),
            qualified_name=self.qualified_name,
        )


class _LineCollector(MethodVisitor):
    def __init__(self, accumulator: UnitAccumulator, method_name: str):
        self.accumulator = accumulator
        self.method_name = method_name

    def visit_line_number(self, line: int, start_pc: int) -> None:
        logger.trace(f"  {self.method_name} line: {line}, pc={start_pc}")
        self.accumulator.add_line(line)


class UnitExtractor(ClassVisitor):
    """Collects one CompiledUnit per visit/visit_end pair.

    Any number of pairs may arrive in one pass; units are committed in the
    order their end events are seen.
    """

    def __init__(self, class_file: Path):
        self.class_file = class_file
        self.units: list[CompiledUnit] = []
        self._current: UnitAccumulator | None = None

    def visit(self, version, access, name, super_name, interfaces) -> None:
        qualified_name = name.replace("/", ".")
        self._current = UnitAccumulator(qualified_name=qualified_name)
        logger.debug(f"Visiting {qualified_name} (class file version {version[0]}.{version[1]})")

    def visit_source(self, source: str) -> None:
        if self._current is not None:
            self._current.source_name = source

    def visit_method(self, access: int, name: str, descriptor: str) -> MethodVisitor | None:
        if self._current is None:
            return None
        logger.trace(f"Method: {name}{descriptor}")
        return _LineCollector(self._current, name)

    def visit_end(self) -> None:
        if self._current is None:
            return
        unit = self._current.commit(self.class_file)
        self._current = None
        self.units.append(unit)


def extract_units(class_file: Path) -> list[CompiledUnit]:
    """Read one class file and return the units it declares.

    Raises:
        OSError: if the file cannot be read
        ClassFormatError: if the file is not a valid class file
    """
    class_file = Path(class_file)
    with open(class_file, "rb") as f:
        data = f.read()

    reader = ClassReader(data)
    extractor = UnitExtractor(class_file)
    reader.accept(extractor)
    return extractor.units
