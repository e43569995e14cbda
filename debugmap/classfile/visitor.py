"""Visitor interfaces driven by ClassReader.accept().

Subclasses override only the callbacks they care about; every default is a
no-op, so a bare ClassVisitor consumes a class without side effects.
"""


class MethodVisitor:
    """Receives the debug events of one method."""

    def visit_line_number(self, line: int, start_pc: int) -> None:
        pass

    def visit_end(self) -> None:
        pass


class ClassVisitor:
    """Receives the structural events of one class, in declaration order.

    Order: visit, visit_source (if the class declares one), visit_method per
    method (each followed by its line numbers and visit_end when a
    MethodVisitor is returned), then visit_end.
    """

    def visit(
        self,
        version: tuple[int, int],
        access: int,
        name: str,
        super_name: str | None,
        interfaces: list[str],
    ) -> None:
        pass

    def visit_source(self, source: str) -> None:
        pass

    def visit_method(self, access: int, name: str, descriptor: str) -> MethodVisitor | None:
        return None

    def visit_end(self) -> None:
        pass
