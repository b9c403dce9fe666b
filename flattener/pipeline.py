"""Per-root flatten pipeline and the sequential batch driver."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from exporters.flattener import FlattenResult, flatten
from exporters.json_exporter import to_standard_json
from exporters.writer import auto_out, write_artifacts
from graph.errors import FlattenError
from graph.leveler import assign_levels
from scanner.builder import resolve_dependencies
from scanner.discovery import find_package_root
from scanner.parser import SourceExtractor
from scanner.store import FileStore
from .config import FlattenConfig, FlattenTarget, load_compiler_settings

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 60


@dataclass
class BatchReport:
    """Outcome of a batch run."""

    flattened: List[Tuple[Path, Path]] = field(default_factory=list)
    failed: List[Tuple[Path, FlattenError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _package_root(config: FlattenConfig) -> Optional[Path]:
    if config.package_root is not None:
        return config.package_root.resolve()
    return find_package_root(config.base_dir)


def flatten_source(
    root: Path,
    config: Optional[FlattenConfig] = None,
    store: Optional[FileStore] = None,
    extractor: Optional[SourceExtractor] = None,
) -> FlattenResult:
    """
    Resolve, level and flatten one root file in memory.

    Every call starts from an empty registry.

    Raises:
        ResolutionError: If an import does not resolve.
        CyclicDependencyError: If the files cannot be ordered.
    """
    config = config or FlattenConfig()
    level = config.log_level

    logger.log(level, "- Resolving")
    root_node, registry = resolve_dependencies(
        Path(root),
        package_root=_package_root(config),
        store=store,
        extractor=extractor,
        log_level=config.resolve_log_level,
    )

    logger.log(level, "- Dependency")
    assign_levels(registry, log_level=level)

    return flatten(root_node, registry, newline=config.newline, base=config.base_dir)


def flatten_file(
    target: FlattenTarget,
    config: Optional[FlattenConfig] = None,
    store: Optional[FileStore] = None,
) -> Path:
    """
    Flatten one target and write its artifacts.

    Returns:
        Directory holding the written artifacts.
    """
    config = config or FlattenConfig()
    level = config.log_level
    logger.log(level, SEPARATOR)
    logger.log(level, "- Loading target %s", target)

    result = flatten_source(target.file, config, store)

    out = target.out if target.out is not None else auto_out(target.file, target.out_auto)
    standard_json = to_standard_json(
        result,
        settings=load_compiler_settings(config),
        evm_version=config.evm_version,
    )
    written = write_artifacts(
        result,
        out,
        standard_json,
        store=store,
        flat_extension=config.flat_extension,
        base=config.base_dir,
    )
    for kind, path in written.items():
        logger.log(level, "- %s to [%s]", kind, path.as_posix())

    logger.info("- flattened [%s]", Path(target.file).as_posix())
    logger.log(level, SEPARATOR)
    return written["flat"].parent


def batch_flatten(
    targets: Iterable[FlattenTarget],
    config: Optional[FlattenConfig] = None,
    store: Optional[FileStore] = None,
) -> BatchReport:
    """
    Flatten targets one after another, continuing past failed targets.

    Each target gets a fresh registry; nothing is shared between them.
    """
    config = config or FlattenConfig()
    report = BatchReport()

    for target in targets:
        try:
            out_dir = flatten_file(target, config, store)
        except FlattenError as e:
            logger.error("ERROR: failed to flatten [%s]", Path(target.file).as_posix())
            logger.error("%s", e)
            report.failed.append((Path(target.file), e))
            continue
        report.flattened.append((Path(target.file), out_dir))

    return report
