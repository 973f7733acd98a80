# Doot Content Store
# Capability interface for reading, writing and fingerprinting files

from abc import ABC, abstractmethod
from pathlib import Path

from doot.utils.hashing import content_hash


class Store(ABC):
    """
    Storage capability shared by the plan builder, status checker and executor.

    Subclasses provide the primitive operations; fingerprinting and
    comparison are derived from `read` and `exists`.
    """

    name: str = "store"

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """Read file content. Raises FileIOError."""

    @abstractmethod
    def write(self, path: Path, content: bytes) -> None:
        """Write content, creating parent directories. Raises FileIOError."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether something is present at path."""

    @abstractmethod
    def remove(self, path: Path) -> None:
        """Remove the file at path if present. Raises FileIOError."""

    def hash(self, path: Path) -> str:
        """SHA-256 hex digest of the file content."""
        return content_hash(self.read(path))

    def compare(self, a: Path, b: Path) -> bool:
        """
        Check whether two files hold identical content.

        Args:
            a: First path.
            b: Second path.

        Returns:
            False if either path is absent, otherwise fingerprint equality.
        """
        if not self.exists(a) or not self.exists(b):
            return False
        return self.hash(a) == self.hash(b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
