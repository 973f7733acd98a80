"""Doot - dotfile import/export between a managed repository and target locations.

Each configured group lives in its own directory of the repository and maps
resolver names to target locations. Files are copied or symlinked in either
direction, filtered by the group's .dootignore rules.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "DootConfig",
    "IgnoreRules",
    "Plan",
    "PlanBuilder",
    "StatusChecker",
    "Executor",
    "create_store",
    "load_config",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("DootConfig", "load_config"):
        from doot import config

        return getattr(config, name)
    if name == "IgnoreRules":
        from doot.ignore import IgnoreRules

        return IgnoreRules
    if name in ("Plan", "PlanBuilder", "StatusChecker"):
        from doot import sync

        return getattr(sync, name)
    if name == "Executor":
        from doot.executor import Executor

        return Executor
    if name == "create_store":
        from doot.store import create_store

        return create_store
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
