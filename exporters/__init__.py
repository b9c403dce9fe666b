"""Exporters for converting a leveled registry into output artifacts."""

from .flattener import FlattenResult, flatten
from .json_exporter import to_standard_json, to_manifest_json, default_settings
from .writer import write_artifacts, auto_out, output_location

__all__ = [
    "FlattenResult",
    "flatten",
    "to_standard_json",
    "to_manifest_json",
    "default_settings",
    "write_artifacts",
    "auto_out",
    "output_location",
]
