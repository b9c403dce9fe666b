"""Dependency resolution: builds the registry reachable from a root file."""

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Optional, Tuple

from graph.errors import ResolutionError
from graph.model import DependencyRegistry, SourceNode
from .parser import LineExtractor, SourceExtractor
from .resolver import resolve_specifier
from .store import FileStore

logger = logging.getLogger(__name__)


def load_node(
    path: Path,
    depth: int,
    package_root: Optional[Path],
    store: FileStore,
    extractor: SourceExtractor,
) -> SourceNode:
    """
    Read and scan one file into a node with resolved import requirements.

    Raises:
        ResolutionError: If the file cannot be read as text or one of its
            imports does not exist.
    """
    try:
        text = store.read_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ResolutionError(path.as_posix(), candidate=path) from e

    scanned = extractor.scan(text)
    node = SourceNode(
        path=path,
        header=scanned.header,
        body=scanned.body,
        bases=extractor.find_bases(text),
        depth=depth,
    )
    for specifier in scanned.specifiers:
        node.require_import(resolve_specifier(path, specifier, package_root, store))
    return node


def link_inheritance(registry: DependencyRegistry) -> None:
    """
    Fill each node's inheritance requirements from its base-type names.

    A base name matches every other registered node whose file stem equals
    it. Unmatched names are left out.
    """
    for node in registry:
        for base in node.bases:
            for match in registry.find_by_stem(base):
                node.require_inherit(match.path)


def resolve_dependencies(
    root: Path,
    package_root: Optional[Path] = None,
    store: Optional[FileStore] = None,
    extractor: Optional[SourceExtractor] = None,
    log_level: int = logging.DEBUG,
) -> Tuple[SourceNode, DependencyRegistry]:
    """
    Discover every file transitively imported by ``root``.

    Files are visited breadth-first from an explicit worklist. Each file is
    read and scanned once; a file reached again only has its discovery
    depth raised. The root itself is the first registry entry.

    Args:
        root: Path of the root source file.
        package_root: Root for ``@``-style specifiers.
        store: File access; defaults to the local filesystem.
        extractor: Source scanner; defaults to the line heuristics.
        log_level: Level for per-file progress messages.

    Returns:
        Tuple of (root node, registry in discovery order).

    Raises:
        ResolutionError: If the root or any imported file does not exist.
    """
    store = store or FileStore()
    extractor = extractor or LineExtractor()
    registry = DependencyRegistry()

    try:
        root_path = store.real_path(root)
    except OSError as e:
        raise ResolutionError(Path(root).as_posix(), candidate=Path(root)) from e

    root_node = registry.add(load_node(root_path, 0, package_root, store, extractor))
    worklist: Deque[SourceNode] = deque([root_node])

    while worklist:
        node = worklist.popleft()
        logger.log(log_level, "   - Resolving [%s]", node.path.as_posix())

        for target in node.import_requires:
            if target in registry:
                registry.raise_depth(target, node.depth + 1)
                continue
            logger.log(log_level, "      - import [%s] at depth %d", target.name, node.depth + 1)
            child = load_node(target, node.depth + 1, package_root, store, extractor)
            worklist.append(registry.add(child))

    link_inheritance(registry)
    return root_node, registry
