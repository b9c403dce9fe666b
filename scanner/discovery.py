"""Discovery of root files and of the package root for scoped imports."""

from pathlib import Path
from typing import Iterator, Set, Optional


DEFAULT_EXTENSIONS = {".sol"}
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", "__pycache__",
    "venv", ".venv",
    ".idea", ".vscode",
    "artifacts", "cache", "typechain", "typechain-types",
    "flat", "build", "dist",
}

PACKAGE_DIR = "node_modules"


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over source files in a directory tree.

    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include (e.g., {'.sol'}).
                    If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Path objects for matching files, in sorted order.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = root.resolve()

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs:
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext:
                    yield entry

    yield from _walk(root, 0)


def find_package_root(cwd: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the directory that ``@``-style imports resolve against.

    Walks up from ``cwd`` and returns the first ``node_modules`` directory
    found, resolved to its real path.

    Returns:
        The package root, or None if no ancestor holds one.
    """
    current = (cwd or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PACKAGE_DIR
        if candidate.is_dir():
            return candidate.resolve()
    return None
