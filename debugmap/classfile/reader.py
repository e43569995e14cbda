"""Class-file parser.

ClassReader parses the whole container up front and only then replays it
to a visitor. A truncated or malformed file therefore fails in the
constructor with ClassFormatError and never produces partial events.
"""

import struct
from dataclasses import dataclass, field

from debugmap.exceptions import ClassFormatError

from .visitor import ClassVisitor

MAGIC = 0xCAFEBABE

# Constant pool tags
CONSTANT_UTF8 = 1
CONSTANT_INTEGER = 3
CONSTANT_FLOAT = 4
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6
CONSTANT_CLASS = 7
CONSTANT_STRING = 8
CONSTANT_FIELDREF = 9
CONSTANT_METHODREF = 10
CONSTANT_INTERFACE_METHODREF = 11
CONSTANT_NAME_AND_TYPE = 12
CONSTANT_METHOD_HANDLE = 15
CONSTANT_METHOD_TYPE = 16
CONSTANT_DYNAMIC = 17
CONSTANT_INVOKE_DYNAMIC = 18
CONSTANT_MODULE = 19
CONSTANT_PACKAGE = 20

# Payload size in bytes for fixed-width constant pool entries
_FIXED_SIZES = {
    CONSTANT_INTEGER: 4,
    CONSTANT_FLOAT: 4,
    CONSTANT_LONG: 8,
    CONSTANT_DOUBLE: 8,
    CONSTANT_CLASS: 2,
    CONSTANT_STRING: 2,
    CONSTANT_FIELDREF: 4,
    CONSTANT_METHODREF: 4,
    CONSTANT_INTERFACE_METHODREF: 4,
    CONSTANT_NAME_AND_TYPE: 4,
    CONSTANT_METHOD_HANDLE: 3,
    CONSTANT_METHOD_TYPE: 2,
    CONSTANT_DYNAMIC: 4,
    CONSTANT_INVOKE_DYNAMIC: 4,
    CONSTANT_MODULE: 2,
    CONSTANT_PACKAGE: 2,
}

# Long and Double occupy two constant pool slots
_WIDE_TAGS = {CONSTANT_LONG, CONSTANT_DOUBLE}


def decode_modified_utf8(raw: bytes) -> str:
    """Decode the JVM's modified UTF-8.

    Differs from standard UTF-8 in two ways: NUL is encoded as C0 80, and
    supplementary characters are stored as two encoded UTF-16 surrogates.
    """
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", errors="surrogatepass")
    if any("\ud800" <= ch <= "\udfff" for ch in text):
        text = text.encode("utf-16-le", errors="surrogatepass").decode(
            "utf-16-le", errors="replace"
        )
    return text


@dataclass
class _Method:
    access: int
    name: str
    descriptor: str
    # (start_pc, line) pairs in table order
    line_numbers: list[tuple[int, int]] = field(default_factory=list)


class _Buffer:
    """Bounds-checked big-endian cursor over the class bytes."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def take(self, size: int) -> bytes:
        end = self.pos + size
        if size < 0 or end > len(self.data):
            raise ClassFormatError("Unexpected end of class file", offset=self.pos)
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def u1(self) -> int:
        return self.take(1)[0]

    def u2(self) -> int:
        return struct.unpack(">H", self.take(2))[0]

    def u4(self) -> int:
        return struct.unpack(">I", self.take(4))[0]


class ClassReader:
    """Parsed view of one class file.

    Args:
        data: Raw class-file bytes

    Raises:
        ClassFormatError: if the bytes are not a well-formed class file
    """

    def __init__(self, data: bytes):
        self._buf = _Buffer(bytes(data))
        self._pool: list[tuple[int, object] | None] = []
        self.version: tuple[int, int] = (0, 0)
        self.access = 0
        self.name = ""
        self.super_name: str | None = None
        self.interfaces: list[str] = []
        self.source_file: str | None = None
        self.methods: list[_Method] = []
        self._parse()

    # ------------------------------------------------------------------
    # Constant pool
    # ------------------------------------------------------------------

    def _read_constant_pool(self) -> None:
        count = self._buf.u2()
        pool: list[tuple[int, object] | None] = [None] * max(count, 1)
        index = 1
        while index < count:
            start = self._buf.pos
            tag = self._buf.u1()
            if tag == CONSTANT_UTF8:
                length = self._buf.u2()
                try:
                    pool[index] = (tag, decode_modified_utf8(self._buf.take(length)))
                except UnicodeDecodeError as e:
                    raise ClassFormatError(f"Malformed UTF-8 constant: {e}", offset=start) from e
            elif tag in (CONSTANT_CLASS, CONSTANT_STRING, CONSTANT_MODULE,
                         CONSTANT_PACKAGE, CONSTANT_METHOD_TYPE):
                pool[index] = (tag, self._buf.u2())
            elif tag in _FIXED_SIZES:
                pool[index] = (tag, self._buf.take(_FIXED_SIZES[tag]))
            else:
                raise ClassFormatError(f"Unknown constant pool tag {tag}", offset=start)
            index += 2 if tag in _WIDE_TAGS else 1
        self._pool = pool

    def _entry(self, index: int, expected: int):
        if not 0 < index < len(self._pool) or self._pool[index] is None:
            raise ClassFormatError(f"Invalid constant pool index {index}", offset=self._buf.pos)
        tag, value = self._pool[index]
        if tag != expected:
            raise ClassFormatError(
                f"Constant pool entry {index} has tag {tag}, expected {expected}",
                offset=self._buf.pos,
            )
        return value

    def _utf8(self, index: int) -> str:
        return self._entry(index, CONSTANT_UTF8)

    def _class_name(self, index: int) -> str:
        return self._utf8(self._entry(index, CONSTANT_CLASS))

    # ------------------------------------------------------------------
    # Members and attributes
    # ------------------------------------------------------------------

    def _skip_attributes(self) -> None:
        for _ in range(self._buf.u2()):
            self._buf.u2()
            self._buf.take(self._buf.u4())

    def _read_code(self, method: _Method, length: int) -> None:
        end = self._buf.pos + length
        self._buf.take(4)  # max_stack, max_locals
        self._buf.take(self._buf.u4())
        self._buf.take(self._buf.u2() * 8)  # exception table
        for _ in range(self._buf.u2()):
            name = self._utf8(self._buf.u2())
            attr_length = self._buf.u4()
            if name == "LineNumberTable":
                for _ in range(self._buf.u2()):
                    start_pc = self._buf.u2()
                    method.line_numbers.append((start_pc, self._buf.u2()))
            else:
                self._buf.take(attr_length)
        if self._buf.pos != end:
            raise ClassFormatError("Code attribute length mismatch", offset=self._buf.pos)

    def _read_method(self) -> _Method:
        access = self._buf.u2()
        name = self._utf8(self._buf.u2())
        descriptor = self._utf8(self._buf.u2())
        method = _Method(access, name, descriptor)
        for _ in range(self._buf.u2()):
            attr_name = self._utf8(self._buf.u2())
            length = self._buf.u4()
            if attr_name == "Code":
                self._read_code(method, length)
            else:
                self._buf.take(length)
        return method

    def _parse(self) -> None:
        buf = self._buf
        if len(buf.data) < 4 or buf.u4() != MAGIC:
            raise ClassFormatError("Not a class file (bad magic)", offset=0)
        minor = buf.u2()
        major = buf.u2()
        self.version = (major, minor)

        self._read_constant_pool()

        self.access = buf.u2()
        self.name = self._class_name(buf.u2())
        super_index = buf.u2()
        self.super_name = self._class_name(super_index) if super_index else None
        self.interfaces = [self._class_name(buf.u2()) for _ in range(buf.u2())]

        # Fields carry no line information
        for _ in range(buf.u2()):
            buf.take(6)
            self._skip_attributes()

        self.methods = [self._read_method() for _ in range(buf.u2())]

        for _ in range(buf.u2()):
            attr_name = self._utf8(buf.u2())
            length = buf.u4()
            if attr_name == "SourceFile":
                self.source_file = self._utf8(buf.u2())
            else:
                buf.take(length)

        if buf.pos != len(buf.data):
            raise ClassFormatError("Trailing bytes after class attributes", offset=buf.pos)

    # ------------------------------------------------------------------
    # Event replay
    # ------------------------------------------------------------------

    def accept(self, visitor: ClassVisitor) -> None:
        """Replay the parsed class to ``visitor``."""
        visitor.visit(self.version, self.access, self.name, self.super_name, list(self.interfaces))
        if self.source_file is not None:
            visitor.visit_source(self.source_file)
        for method in self.methods:
            method_visitor = visitor.visit_method(method.access, method.name, method.descriptor)
            if method_visitor is None:
                continue
            for start_pc, line in method.line_numbers:
                method_visitor.visit_line_number(line, start_pc)
            method_visitor.visit_end()
        visitor.visit_end()
