"""Scanner module for source scanning and dependency resolution."""

from .discovery import iter_files, find_package_root
from .parser import scan_source, find_inheritance, LineExtractor, SourceExtractor
from .resolver import resolve_specifier
from .builder import resolve_dependencies
from .store import FileStore

__all__ = [
    "iter_files",
    "find_package_root",
    "scan_source",
    "find_inheritance",
    "LineExtractor",
    "SourceExtractor",
    "resolve_specifier",
    "resolve_dependencies",
    "FileStore",
]
