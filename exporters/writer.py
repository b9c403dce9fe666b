"""Placement and writing of the flatten artifacts."""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from graph.errors import ConfigError
from scanner.store import FileStore
from .flattener import FlattenResult
from .json_exporter import to_json, to_manifest_json

AUTO_OUT_DIR = "flat"
MANIFEST_SUFFIX = ".info.json"
COMPILER_INPUT_SUFFIX = ".json"


def auto_out(root_file: Path, sub: Optional[str] = None) -> str:
    """Derive an output target ``flat/<sub>/<root stem>`` for a root file."""
    parts = [AUTO_OUT_DIR]
    if sub:
        parts.append(sub.strip("/\\"))
    parts.append(Path(root_file).stem)
    return "/".join(parts)


def output_location(out: str, base: Optional[Path] = None) -> Tuple[Path, str]:
    """
    Split an output target into its artifact directory and artifact name.

    ``dir/name`` places the artifacts in ``dir/name/`` and names them
    ``name.*``.

    Raises:
        ConfigError: If the target has no name component.
    """
    normalized = out.replace("\\", "/").rstrip("/")
    parent, _, name = normalized.rpartition("/")
    if not name:
        raise ConfigError(f"Output target '{out}' has no name")
    directory = Path(parent) / name if parent else Path(name)
    if base is not None and not directory.is_absolute():
        directory = base / directory
    return directory, name


def write_artifacts(
    result: FlattenResult,
    out: str,
    standard_json: Dict[str, Any],
    store: Optional[FileStore] = None,
    flat_extension: str = ".sol",
    base: Optional[Path] = None,
) -> Dict[str, Path]:
    """
    Write manifest, flat file and compiler input for one root.

    Args:
        result: The flatten result.
        out: Output target (``dir/name``).
        standard_json: Complete compiler input document.
        store: File access; defaults to the local filesystem.
        flat_extension: Extension of the flat file.
        base: Directory relative targets are placed under.

    Returns:
        Mapping of artifact kind ("manifest", "flat", "compiler_input") to path.
    """
    store = store or FileStore()
    directory, name = output_location(out, base)
    store.mkdir(directory, recursive=True)

    written = {
        "manifest": directory / f"{name}{MANIFEST_SUFFIX}",
        "flat": directory / f"{name}{flat_extension}",
        "compiler_input": directory / f"{name}{COMPILER_INPUT_SUFFIX}",
    }
    store.write_file(written["manifest"], to_manifest_json(result))
    store.write_file(written["flat"], result.flat_text)
    store.write_file(written["compiler_input"], to_json(standard_json))
    return written
