# Doot Store Module
# Copy and symlink content stores

from doot.config.schema import Mode
from doot.store.base import Store
from doot.store.file import FileStore
from doot.store.link import LinkStore


def create_store(mode: Mode) -> Store:
    """
    Create the store matching the configured materialization mode.

    Args:
        mode: Configured mode.

    Returns:
        FileStore for copy mode, LinkStore for link mode.
    """
    if mode == Mode.LINK:
        return LinkStore()
    return FileStore()


__all__ = [
    "Store",
    "FileStore",
    "LinkStore",
    "create_store",
]
