# Doot Link Store
# Symlink-based materialization

import logging
import os
from pathlib import Path

from doot.errors import FileIOError, SymlinkError
from doot.store.base import Store
from doot.store.file import read_bytes, write_bytes

logger = logging.getLogger(__name__)


class LinkStore(Store):
    """
    Store whose entries are symlinks pointing back into the managed tree.

    Content is still read through the link for fingerprinting and diffs.
    Materialization goes through `create_symlink`, never `write`.
    """

    name = "link"

    def read(self, path: Path) -> bytes:
        return read_bytes(path)

    def write(self, path: Path, content: bytes) -> None:
        write_bytes(path, content)

    def exists(self, path: Path) -> bool:
        # a dangling link still occupies the destination
        return path.exists() or path.is_symlink()

    def remove(self, path: Path) -> None:
        if not self.exists(path):
            return
        try:
            path.unlink()
        except OSError as e:
            raise FileIOError(f"Failed to remove: {path}") from e

    def create_symlink(self, source: Path, destination: Path) -> None:
        """
        Replace whatever is at destination with a symlink to source.

        Args:
            source: File the link points at.
            destination: Location of the link.

        Raises:
            FileIOError: If the parent directory or the old entry cannot be handled.
            SymlinkError: If the link itself cannot be created.
        """
        parent = destination.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileIOError(f"Failed to create directory: {parent}") from e

        if self.exists(destination):
            try:
                destination.unlink()
            except OSError as e:
                raise FileIOError(f"Failed to remove existing: {destination}") from e

        try:
            os.symlink(source, destination)
        except OSError as e:
            raise SymlinkError(f"Failed to create symlink: {destination} -> {source}") from e

        logger.debug("Linked %s -> %s", destination, source)
