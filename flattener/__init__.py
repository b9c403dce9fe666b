"""Flatten configuration and pipeline."""

from .config import (
    BatchConfig,
    FlattenConfig,
    FlattenTarget,
    load_batch_config,
    load_compiler_settings,
)
from .pipeline import BatchReport, batch_flatten, flatten_file, flatten_source

__all__ = [
    "FlattenConfig",
    "FlattenTarget",
    "BatchConfig",
    "load_batch_config",
    "load_compiler_settings",
    "BatchReport",
    "flatten_source",
    "flatten_file",
    "batch_flatten",
]
