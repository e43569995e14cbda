"""Minimal JVM class-file reader.

Reads just enough of the class-file format to report type declarations,
source attribution and line-number tables through a visitor interface.
"""

from .reader import ClassReader
from .visitor import ClassVisitor, MethodVisitor

__all__ = ["ClassReader", "ClassVisitor", "MethodVisitor"]
