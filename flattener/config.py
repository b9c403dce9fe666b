"""Configuration for flatten runs and loading of batch files."""

import json
import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from graph.errors import ConfigError

logger = logging.getLogger(__name__)

EVM_VERSIONS = (
    "petersburg",
    "istanbul",
    "berlin",
    "london",
    "paris",
    "shanghai",
    "cancun",
    "prague",
)
DEFAULT_EVM_VERSION = "paris"
DEFAULT_COMPILER_CONFIG = Path("compiler_config.json")
NEWLINES = {"crlf": "\r\n", "lf": "\n"}


@dataclass(frozen=True)
class FlattenConfig:
    """Options passed explicitly to every flatten call."""

    package_root: Optional[Path] = None
    evm_version: str = DEFAULT_EVM_VERSION
    compiler_config: Optional[Path] = DEFAULT_COMPILER_CONFIG
    newline: str = "\r\n"
    flat_extension: str = ".sol"
    silent: bool = True
    silent_resolve: bool = True
    base_dir: Path = field(default_factory=Path.cwd)

    def __post_init__(self):
        if self.evm_version not in EVM_VERSIONS:
            raise ConfigError(
                f"Unknown EVM version '{self.evm_version}' (expected one of {', '.join(EVM_VERSIONS)})"
            )

    @property
    def log_level(self) -> int:
        """Level for step progress messages."""
        return logging.DEBUG if self.silent else logging.INFO

    @property
    def resolve_log_level(self) -> int:
        """Level for per-file resolution messages."""
        return logging.DEBUG if self.silent or self.silent_resolve else logging.INFO

    def with_overrides(self, **changes: Any) -> "FlattenConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass(frozen=True)
class FlattenTarget:
    """One root file and where its artifacts go."""

    file: Path
    out: Optional[str] = None
    out_auto: Optional[str] = None

    def __post_init__(self):
        if self.out is None and self.out_auto is None:
            raise ConfigError(f"Target '{self.file}' needs 'out' or 'outAuto'")


@dataclass
class BatchConfig:
    """Contents of a batch file."""

    targets: List[FlattenTarget]
    evm_version: Optional[str] = None
    package_root: Optional[Path] = None


def parse_config_file(file_path: Path) -> Any:
    """
    Parse a YAML, JSON or TOML file by extension.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {file_path}: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
        elif suffix == ".json":
            return json.loads(content)
        elif suffix == ".toml":
            return tomllib.loads(content)
        else:
            return yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot parse {file_path}: {e}") from e


def load_batch_config(file_path: Path) -> BatchConfig:
    """
    Load a batch file listing flatten targets.

    Relative ``file`` and ``packageRoot`` entries are taken relative to the
    batch file's directory.

    Raises:
        ConfigError: If the file is malformed.
    """
    file_path = Path(file_path)
    data = parse_config_file(file_path)
    if not isinstance(data, dict) or not isinstance(data.get("targets"), list):
        raise ConfigError(f"{file_path}: expected a mapping with a 'targets' list")

    base = file_path.resolve().parent
    targets: List[FlattenTarget] = []
    for index, entry in enumerate(data["targets"]):
        if not isinstance(entry, dict) or not entry.get("file"):
            raise ConfigError(f"{file_path}: target #{index} needs a 'file' entry")
        out_auto = entry.get("outAuto")
        if out_auto is True:
            out_auto = ""
        targets.append(
            FlattenTarget(
                file=base / entry["file"],
                out=entry.get("out"),
                out_auto=out_auto,
            )
        )

    package_root = data.get("packageRoot")
    return BatchConfig(
        targets=targets,
        evm_version=data.get("evmVersion"),
        package_root=base / package_root if package_root else None,
    )


def load_compiler_settings(config: FlattenConfig) -> Optional[Dict[str, Any]]:
    """
    Read the ``settings`` object of the compiler config file, if any.

    A missing file yields None; an unreadable one is logged and also
    yields None so the defaults apply.
    """
    if config.compiler_config is None:
        return None
    path = config.compiler_config
    if not path.is_absolute():
        path = config.base_dir / path
    if not path.is_file():
        return None

    try:
        settings = json.loads(path.read_text(encoding="utf-8")).get("settings")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, AttributeError) as e:
        logger.warning("Ignoring compiler config %s: %s", path, e)
        return None

    if settings is not None and not isinstance(settings, dict):
        logger.warning("Ignoring compiler config %s: 'settings' is not an object", path)
        return None
    return settings
