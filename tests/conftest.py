"""Pytest configuration and fixtures.

Class files are assembled byte by byte by ``build_class`` so the tests do
not depend on a JDK or Scala compiler being installed.
"""

import struct
from pathlib import Path

import pytest


class _ConstantPool:
    def __init__(self):
        self.entries: list[bytes] = []
        self.next_index = 1
        self._utf8: dict[str, int] = {}

    def _add(self, payload: bytes, slots: int = 1) -> int:
        index = self.next_index
        self.entries.append(payload)
        self.next_index += slots
        return index

    def utf8(self, text: str) -> int:
        if text not in self._utf8:
            raw = text.encode("utf-8")
            self._utf8[text] = self._add(struct.pack(">BH", 1, len(raw)) + raw)
        return self._utf8[text]

    def class_ref(self, name: str) -> int:
        return self._add(struct.pack(">BH", 7, self.utf8(name)))

    def long(self, value: int) -> int:
        return self._add(struct.pack(">Bq", 5, value), slots=2)

    def integer(self, value: int) -> int:
        return self._add(struct.pack(">Bi", 3, value))

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.next_index) + b"".join(self.entries)


def build_class(
    name: str,
    source: str | None = None,
    methods: list[list[int]] | None = None,
    super_name: str | None = "java/lang/Object",
    interfaces: tuple[str, ...] = (),
) -> bytes:
    """Assemble a minimal, valid class file.

    Args:
        name: Internal class name, e.g. "com/acme/Foo"
        source: SourceFile attribute value (omitted when None)
        methods: One list of line numbers per method; an empty list gives a
            method without a LineNumberTable
        super_name: Internal name of the superclass (None for no superclass)
        interfaces: Internal names of implemented interfaces
    """
    methods = methods if methods is not None else []
    pool = _ConstantPool()

    # Wide and numeric constants exercise constant pool slot accounting
    pool.long(1 << 40)
    pool.integer(7)

    this_index = pool.class_ref(name)
    super_index = pool.class_ref(super_name) if super_name else 0
    interface_indexes = [pool.class_ref(i) for i in interfaces]
    code_name = pool.utf8("Code")
    lnt_name = pool.utf8("LineNumberTable")
    desc_index = pool.utf8("()V")
    field_name = pool.utf8("counter")
    field_desc = pool.utf8("I")
    source_attr = pool.utf8("SourceFile") if source is not None else 0
    source_index = pool.utf8(source) if source is not None else 0
    method_names = [pool.utf8(f"m{i}") for i in range(len(methods))]

    body = struct.pack(">HHH", 0x0021, this_index, super_index)
    body += struct.pack(">H", len(interface_indexes))
    body += b"".join(struct.pack(">H", i) for i in interface_indexes)

    # One field with no attributes
    body += struct.pack(">H", 1) + struct.pack(">HHHH", 0x0002, field_name, field_desc, 0)

    body += struct.pack(">H", len(methods))
    for method_name, lines in zip(method_names, methods):
        code = b"\xb1"  # return
        code_attrs = b""
        code_attr_count = 0
        if lines:
            table = struct.pack(">H", len(lines)) + b"".join(
                struct.pack(">HH", pc, line) for pc, line in enumerate(lines)
            )
            code_attrs = struct.pack(">HI", lnt_name, len(table)) + table
            code_attr_count = 1
        code_body = (
            struct.pack(">HHI", 1, 1, len(code)) + code
            + struct.pack(">H", 0)
            + struct.pack(">H", code_attr_count) + code_attrs
        )
        body += struct.pack(">HHHH", 0x0001, method_name, desc_index, 1)
        body += struct.pack(">HI", code_name, len(code_body)) + code_body

    if source is not None:
        body += struct.pack(">H", 1) + struct.pack(">HIH", source_attr, 2, source_index)
    else:
        body += struct.pack(">H", 0)

    return struct.pack(">IHH", 0xCAFEBABE, 0, 52) + pool.to_bytes() + body


@pytest.fixture
def class_bytes():
    """Expose the class-file builder to tests."""
    return build_class


@pytest.fixture
def write_class(tmp_path):
    """Write a built class file under ``tmp_path/classes`` and return its path."""
    classes = tmp_path / "classes"

    def _write(name: str, **kwargs) -> Path:
        path = classes / f"{name}.class"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_class(name, **kwargs))
        return path

    return _write


@pytest.fixture
def sample_project(tmp_path):
    """Minimal Scala project: sources under src/, compiled output under classes/.

    Layout:
      src/com/acme/Foo.scala       -> com.acme.Foo (10-40), com.acme.Foo$Inner (20-30)
      src/com/acme/Bar.scala       -> com.acme.Bar (1-12)
      src/other/Bar.scala          (same bare name, different directory)
      classes/com/acme/NoSource    (no SourceFile attribute)
      classes/com/acme/Broken      (truncated)
    """
    src = tmp_path / "src"
    (src / "com" / "acme").mkdir(parents=True)
    (src / "other").mkdir(parents=True)
    (src / "com" / "acme" / "Foo.scala").write_text("package com.acme\nclass Foo\n")
    (src / "com" / "acme" / "Bar.scala").write_text("package com.acme\nclass Bar\n")
    (src / "other" / "Bar.scala").write_text("package other\nclass Bar\n")

    classes = tmp_path / "classes"
    pkg = classes / "com" / "acme"
    pkg.mkdir(parents=True)
    (pkg / "Foo.class").write_bytes(
        build_class("com/acme/Foo", source="Foo.scala", methods=[[10, 12], [35, 40]])
    )
    (pkg / "Foo$Inner.class").write_bytes(
        build_class("com/acme/Foo$Inner", source="Foo.scala", methods=[[20, 30]])
    )
    (pkg / "Bar.class").write_bytes(
        build_class("com/acme/Bar", source="Bar.scala", methods=[[1, 12]])
    )
    (pkg / "NoSource.class").write_bytes(build_class("com/acme/NoSource", methods=[[3]]))
    (pkg / "Broken.class").write_bytes(
        build_class("com/acme/Broken", source="Foo.scala", methods=[[1]])[:40]
    )
    return tmp_path
