"""Error types raised while flattening a source tree."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple


class FlattenError(Exception):
    """Base class for every fatal flattening error."""


class ConfigError(FlattenError):
    """Invalid configuration, batch file or output target."""


class ResolutionError(FlattenError):
    """An import specifier does not resolve to an existing file."""

    def __init__(
        self,
        specifier: str,
        importer: Optional[Path] = None,
        candidate: Optional[Path] = None,
    ):
        self.specifier = specifier
        self.importer = importer
        self.candidate = candidate
        message = f"Cannot resolve import '{specifier}'"
        if importer is not None:
            message += f" in {importer.as_posix()}"
        if candidate is not None:
            message += f" (tried {candidate.as_posix()})"
        super().__init__(message)


class CyclicDependencyError(FlattenError):
    """
    No remaining node can be emitted by import or inheritance peeling.

    ``remaining`` maps each stuck node's canonical path to its unmet
    import and inheritance requirements, in discovery order.
    """

    def __init__(self, remaining: Dict[Path, Tuple[List[Path], List[Path]]]):
        self.remaining = remaining
        lines = ["Cyclic dependency between:"]
        for path, (imports, inherits) in remaining.items():
            lines.append(f"  {path.as_posix()}")
            lines.append(f"    imports:  {', '.join(p.name for p in imports) or '-'}")
            lines.append(f"    inherits: {', '.join(p.name for p in inherits) or '-'}")
        super().__init__("\n".join(lines))

    @property
    def paths(self) -> List[Path]:
        """Paths of the nodes that could not be ordered."""
        return list(self.remaining)
