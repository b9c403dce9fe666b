"""JSON exporters for the manifest and the standard JSON compiler input."""

import copy
import json
from typing import Any, Dict, Optional

from .flattener import FlattenResult

LANGUAGE = "Solidity"
DEFAULT_EVM_VERSION = "paris"
INDENT = "\t"


def default_settings(evm_version: str = DEFAULT_EVM_VERSION) -> Dict[str, Any]:
    """Compiler settings used when no compiler config overrides them."""
    return {
        "optimizer": {
            "enabled": True,
            "runs": 200,
        },
        "evmVersion": evm_version,
    }


def to_standard_json(
    result: FlattenResult,
    settings: Optional[Dict[str, Any]] = None,
    evm_version: str = DEFAULT_EVM_VERSION,
) -> Dict[str, Any]:
    """
    Wrap the compiler sources into a standard JSON input document.

    Args:
        result: Flatten result holding the per-file sources.
        settings: Settings object replacing the defaults wholesale.
        evm_version: EVM version for the default settings.

    Returns:
        ``{"language", "sources", "settings"}`` dictionary.
    """
    return {
        "language": LANGUAGE,
        "sources": copy.deepcopy(result.compiler_input),
        "settings": copy.deepcopy(settings) if settings is not None else default_settings(evm_version),
    }


def to_json(data: Any, indent: str = INDENT) -> str:
    return json.dumps(data, indent=indent)


def to_manifest_json(result: FlattenResult, indent: str = INDENT) -> str:
    """Serialize the manifest as a JSON array of ``{path, level}`` objects."""
    return to_json(result.manifest, indent)
