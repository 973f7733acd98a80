# Doot Path Utilities
# Resolver string expansion and managed tree walking

import os
import re
from pathlib import Path
from typing import Optional

import pathspec

from doot.errors import PathResolutionError

_ENV_VAR = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<plain>[A-Za-z_][A-Za-z0-9_]*))")

VCS_DIRS = frozenset({".git", ".hg", ".svn"})


def resolve_path(path: str) -> Path:
    """
    Expand ~ and environment variables in a resolver string.

    Unlike os.path.expandvars, a reference to an undefined variable is an
    error instead of being left in place.

    Args:
        path: Target location string from the group table.

    Returns:
        Expanded Path object.

    Raises:
        PathResolutionError: If a variable is undefined or ~user is unknown.
    """
    expanded = os.path.expanduser(path)
    if expanded.startswith("~"):
        raise PathResolutionError(f"Failed to expand path '{path}': unknown home directory")

    def substitute(match: re.Match) -> str:
        name = match.group("braced") if match.group("braced") is not None else match.group("plain")
        value = os.environ.get(name) if name else None
        if value is None:
            raise PathResolutionError(f"Failed to expand path '{path}': environment variable '{name}' not set")
        return value

    return Path(_ENV_VAR.sub(substitute, expanded))


def walk_files(
    root: Path,
    *,
    skip_dirs: frozenset[str] = frozenset(),
    ignore_spec: Optional[pathspec.PathSpec] = None,
) -> list[Path]:
    """
    Recursively list regular files under root.

    Symlinks are neither followed nor reported.

    Args:
        root: Directory to walk.
        skip_dirs: Directory names to prune anywhere in the tree.
        ignore_spec: Spec matched against root-relative paths. Matching
            directories are pruned and matching files are skipped.

    Returns:
        Regular file paths. Empty if root does not exist.
    """
    if not root.is_dir():
        return []

    results: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        prefix = current.relative_to(root).as_posix()
        prefix = "" if prefix == "." else prefix + "/"

        dirnames[:] = [
            d
            for d in dirnames
            if d not in skip_dirs and not (ignore_spec is not None and ignore_spec.match_file(f"{prefix}{d}/"))
        ]
        for name in filenames:
            path = current / name
            if path.is_symlink() or not path.is_file():
                continue
            if ignore_spec is not None and ignore_spec.match_file(prefix + name):
                continue
            results.append(path)

    return results


def relative_key(path: Path, root: Path) -> str:
    """Forward-slash relative path used to match ignore rules and identify entries."""
    return path.relative_to(root).as_posix()
