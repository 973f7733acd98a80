# Doot File Store
# Copy-based materialization

from pathlib import Path

from doot.errors import FileIOError
from doot.store.base import Store


def read_bytes(path: Path) -> bytes:
    """Read a file, wrapping OSError."""
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileIOError(f"Failed to read: {path}") from e


def write_bytes(path: Path, content: bytes) -> None:
    """Write a file after creating its parent directories, wrapping OSError."""
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileIOError(f"Failed to create directory: {parent}") from e

    try:
        path.write_bytes(content)
    except OSError as e:
        raise FileIOError(f"Failed to write: {path}") from e


class FileStore(Store):
    """Store that duplicates byte content into the destination."""

    name = "file"

    def read(self, path: Path) -> bytes:
        return read_bytes(path)

    def write(self, path: Path, content: bytes) -> None:
        write_bytes(path, content)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def remove(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as e:
            raise FileIOError(f"Failed to remove: {path}") from e
