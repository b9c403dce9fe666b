"""
Deterministic ordering of a dependency registry.

Nodes are peeled in rounds: every node whose remaining imports are all
emitted leaves in the current round. When no node qualifies, nodes whose
inheritance requirements are met are peeled instead, which breaks import
cycles between files that do not derive from each other.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

from .errors import CyclicDependencyError
from .model import DependencyRegistry, SourceNode

logger = logging.getLogger(__name__)


def order_nodes(registry: DependencyRegistry, log_level: int = logging.DEBUG) -> List[SourceNode]:
    """
    Compute the dependency-first emission order of a registry.

    Nodes emitted in the same round keep their relative registry order.
    The registry is not modified.

    Raises:
        CyclicDependencyError: If neither imports nor inheritance allow progress.
    """
    pending: List[SourceNode] = registry.nodes
    unmet_imports: Dict[Path, Set[Path]] = {n.path: set(n.import_requires) for n in pending}
    unmet_inherits: Dict[Path, Set[Path]] = {n.path: set(n.inherit_requires) for n in pending}
    ordered: List[SourceNode] = []
    round_no = 0

    while pending:
        logger.log(log_level, "   - Round [%d]", round_no)

        candidates = [n for n in pending if not unmet_imports[n.path]]
        for node in candidates:
            logger.log(log_level, "      - NoDeps [%s]", node.file)

        if not candidates:
            candidates = [n for n in pending if not unmet_inherits[n.path]]
            if not candidates:
                raise CyclicDependencyError(
                    {
                        n.path: (
                            [p for p in n.import_requires if p in unmet_imports[n.path]],
                            [p for p in n.inherit_requires if p in unmet_inherits[n.path]],
                        )
                        for n in pending
                    }
                )
            for node in candidates:
                logger.log(log_level, "      - NoInherit [%s]", node.file)

        emitted = {n.path for n in candidates}
        ordered.extend(candidates)
        pending = [n for n in pending if n.path not in emitted]
        for node in pending:
            unmet_imports[node.path] -= emitted
            unmet_inherits[node.path] -= emitted

        round_no += 1

    return ordered


def assign_levels(
    registry: DependencyRegistry,
    log_level: Optional[int] = None,
) -> List[SourceNode]:
    """
    Order the registry and assign every node its level.

    The first emitted node gets ``len(registry)`` and the last gets 1, so
    dependencies always carry a higher level than their dependents. On
    success the registry is reordered to the emission order, which is
    also returned. On failure nothing is changed.
    """
    ordered = order_nodes(registry, logging.DEBUG if log_level is None else log_level)

    total = len(ordered)
    for position, node in enumerate(ordered):
        node.level = total - position

    registry.reorder(ordered)
    return ordered


def manifest_order(registry: DependencyRegistry) -> List[SourceNode]:
    """Return leveled nodes sorted ascending by level (dependents first)."""
    unleveled = [n.file for n in registry if n.level is None]
    if unleveled:
        raise ValueError(f"Nodes without level: {', '.join(unleveled)}")
    return sorted(registry, key=lambda n: n.level)
