# Doot Utilities Module
# Helper functions for path handling and content hashing

from doot.utils.hashing import content_hash
from doot.utils.paths import VCS_DIRS, relative_key, resolve_path, walk_files

__all__ = [
    # Paths
    "resolve_path",
    "walk_files",
    "relative_key",
    "VCS_DIRS",
    # Hashing
    "content_hash",
]
