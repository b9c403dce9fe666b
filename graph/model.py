"""Graph data model for source files and their import relationships."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional


@dataclass
class SourceNode:
    """
    A single source file discovered while resolving a root.

    ``import_requires`` and ``inherit_requires`` hold canonical paths of
    other nodes in the same registry, without duplicates, in the order
    they were found.
    """

    path: Path
    header: List[str] = field(default_factory=list)
    body: List[str] = field(default_factory=list)
    import_requires: List[Path] = field(default_factory=list)
    inherit_requires: List[Path] = field(default_factory=list)
    bases: List[str] = field(default_factory=list)
    depth: int = 0
    level: Optional[int] = None

    @property
    def file(self) -> str:
        """File name of the node."""
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    def require_import(self, target: Path) -> None:
        """Record an import edge; self-imports carry no ordering constraint."""
        if target != self.path and target not in self.import_requires:
            self.import_requires.append(target)

    def require_inherit(self, target: Path) -> None:
        if target != self.path and target not in self.inherit_requires:
            self.inherit_requires.append(target)


class DependencyRegistry:
    """
    Ordered collection of source nodes keyed by canonical path.

    Iteration follows insertion (discovery) order until ``reorder`` is
    called with the emission order computed by the leveler.
    """

    def __init__(self):
        self._nodes: Dict[Path, SourceNode] = {}

    @property
    def nodes(self) -> List[SourceNode]:
        """Return all nodes in registry order."""
        return list(self._nodes.values())

    @property
    def paths(self) -> List[Path]:
        return list(self._nodes)

    def add(self, node: SourceNode) -> SourceNode:
        """
        Register a node.

        A node already registered under the same path is kept; only its
        discovery depth is raised to the deeper of the two.
        """
        existing = self._nodes.get(node.path)
        if existing is not None:
            existing.depth = max(existing.depth, node.depth)
            return existing
        self._nodes[node.path] = node
        return node

    def get(self, path: Path) -> Optional[SourceNode]:
        return self._nodes.get(path)

    def raise_depth(self, path: Path, depth: int) -> None:
        """Raise the stored discovery depth of a registered node (never lowers it)."""
        node = self._nodes[path]
        node.depth = max(node.depth, depth)

    def find_by_stem(self, stem: str) -> List[SourceNode]:
        """Get all nodes whose file name (without extension) equals ``stem``."""
        return [node for node in self._nodes.values() if node.stem == stem]

    def reorder(self, ordered: List[SourceNode]) -> None:
        """Replace the registry order; ``ordered`` must hold exactly the registered nodes."""
        if len(ordered) != len(self._nodes) or {n.path for n in ordered} != set(self._nodes):
            raise ValueError("reorder() needs every registered node exactly once")
        self._nodes = {node.path: node for node in ordered}

    def __iter__(self) -> Iterator[SourceNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        """Return the number of nodes in the registry."""
        return len(self._nodes)

    def __contains__(self, path: Path) -> bool:
        """Check if a path is registered."""
        return path in self._nodes

    def __repr__(self) -> str:
        edges = sum(len(n.import_requires) for n in self._nodes.values())
        return f"DependencyRegistry(nodes={len(self._nodes)}, edges={edges})"
