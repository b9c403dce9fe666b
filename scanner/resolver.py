"""Resolution of import specifiers to canonical file paths."""

from pathlib import Path
from typing import Optional

from graph.errors import ResolutionError
from .store import FileStore

PACKAGE_MARKER = "@"
EXPLICIT_RELATIVE = "./"


def specifier_candidate(
    source_file: Path,
    specifier: str,
    package_root: Optional[Path],
) -> Optional[Path]:
    """
    Map an import specifier to the path it refers to, without touching disk.

    Three forms are understood:
    1. ``@org/pkg/File.sol`` - relative to the package root.
    2. ``./File.sol`` - relative to the importing file's directory.
    3. Anything else - also relative to the importing file's directory.

    Returns:
        Candidate path, or None for a package specifier with no package root.
    """
    normalized = specifier.replace("\\", "/")

    if normalized.startswith(PACKAGE_MARKER):
        if package_root is None:
            return None
        return package_root / normalized

    if normalized.startswith(EXPLICIT_RELATIVE):
        normalized = normalized[len(EXPLICIT_RELATIVE):]

    return source_file.parent / normalized


def resolve_specifier(
    source_file: Path,
    specifier: str,
    package_root: Optional[Path],
    store: Optional[FileStore] = None,
) -> Path:
    """
    Resolve an import specifier to the canonical path of an existing file.

    Distinct spellings of the same file (``./A.sol``, ``A.sol``,
    ``../dir/A.sol``, symlinks) all resolve to the same path.

    Args:
        source_file: Canonical path of the importing file.
        specifier: Raw import target.
        package_root: Root for ``@`` specifiers, if known.
        store: File access; defaults to the local filesystem.

    Raises:
        ResolutionError: If the specifier does not name an existing file.
    """
    store = store or FileStore()
    candidate = specifier_candidate(source_file, specifier, package_root)
    if candidate is None:
        raise ResolutionError(specifier, importer=source_file)

    if not store.exists(candidate):
        raise ResolutionError(specifier, importer=source_file, candidate=candidate)

    try:
        return store.real_path(candidate)
    except OSError as e:
        raise ResolutionError(specifier, importer=source_file, candidate=candidate) from e

