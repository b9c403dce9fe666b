"""Dependency registry, leveling and error types."""

from .errors import ConfigError, CyclicDependencyError, FlattenError, ResolutionError
from .leveler import assign_levels, manifest_order, order_nodes
from .model import DependencyRegistry, SourceNode

__all__ = [
    "SourceNode",
    "DependencyRegistry",
    "assign_levels",
    "order_nodes",
    "manifest_order",
    "FlattenError",
    "ConfigError",
    "ResolutionError",
    "CyclicDependencyError",
]
