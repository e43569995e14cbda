"""Source registry: bare source file name -> absolute paths on disk."""

import os
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_SOURCE_EXTENSIONS
from .core import FileWalker


class SourceRegistry:
    """Maps a bare file name such as ``Foo.scala`` to every path carrying it.

    A project may hold same-named files in different directories, so one
    name can resolve to several paths. Paths keep encounter order and an
    identical path is only recorded once.
    """

    def __init__(self, source_files: Iterable[str | Path] = ()):
        self._paths: dict[str, list[str]] = {}
        for source_file in source_files:
            self.add(source_file)

    @classmethod
    def from_roots(
        cls,
        roots: Iterable[str | Path],
        extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
        walker: FileWalker | None = None,
    ) -> "SourceRegistry":
        walker = walker or FileWalker()
        return cls(walker.walk_source_files([Path(r) for r in roots], extensions))

    def add(self, source_file: str | Path) -> None:
        path = os.path.abspath(source_file)
        name = os.path.basename(path)
        paths = self._paths.get(name)
        if paths is None:
            paths = []
            self._paths[name] = paths
        if path not in paths:
            paths.append(path)

    def paths_for(self, source_name: str | None) -> tuple[str, ...]:
        if source_name is None:
            return ()
        return tuple(self._paths.get(source_name, ()))

    def names(self) -> list[str]:
        return list(self._paths)

    def __contains__(self, source_name: object) -> bool:
        return source_name in self._paths

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._paths.values())
