"""Custom exceptions for debugmap.

Only failure modes that callers handle explicitly get their own class;
everything else propagates as the built-in exception that caused it.
"""


class DebugMapError(Exception):
    """Base class for debugmap errors."""


class ClassFormatError(DebugMapError):
    """Raised when a class file is truncated or structurally invalid.

    The reader raises this once, before emitting any visitor event, so a
    caller never observes partial state for a broken file.

    Attributes:
        offset: Byte offset at which parsing failed, when known
    """

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message if offset is None else f"{message} (at offset {offset})")
        self.offset = offset
