"""Filesystem access used by the resolver and the artifact writer."""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class FileStore:
    """
    Thin wrapper over the local filesystem.

    Tests and embedders can substitute any object with the same methods.
    """

    encoding = "utf-8"

    def read_file(self, path: PathLike) -> str:
        """Read a text file; raises FileNotFoundError if it is absent."""
        return Path(path).read_text(encoding=self.encoding)

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def real_path(self, path: PathLike) -> Path:
        """Return the absolute, symlink-resolved path; raises if it does not exist."""
        return Path(path).resolve(strict=True)

    def write_file(self, path: PathLike, text: str) -> None:
        # newline="" keeps the artifact's own line separators untouched
        with open(path, "w", encoding=self.encoding, newline="") as f:
            f.write(text)

    def mkdir(self, path: PathLike, recursive: bool = True) -> None:
        Path(path).mkdir(parents=recursive, exist_ok=True)
