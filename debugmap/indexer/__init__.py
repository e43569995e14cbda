"""debugmap indexer package.

Builds the bidirectional index between compiled class locations and source
locations:

- FileWalker enumerates class files and source files
- SourceRegistry maps bare source names to paths on disk
- extract_units() turns one class file into CompiledUnit records
- UnitIndex holds the derived mappings
- QueryEngine answers lookups once the build pass is done
"""

from .core import FileWalker
from .extractor import UnitExtractor, extract_units
from .models import CompiledUnit, DebugSourceLinePairs
from .orchestrator import IndexerOrchestrator
from .query import QueryEngine
from .registry import SourceRegistry
from .runner import run_debug_index
from .unit_index import UnitIndex

__all__ = [
    'CompiledUnit',
    'DebugSourceLinePairs',
    'FileWalker',
    'IndexerOrchestrator',
    'QueryEngine',
    'SourceRegistry',
    'UnitExtractor',
    'UnitIndex',
    'extract_units',
    'run_debug_index',
]
