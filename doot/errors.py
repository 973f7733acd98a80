# Doot Errors
# Error kinds and context-chained exceptions

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    CONFIGURATION = "configuration"
    PATTERN = "pattern"
    PATH_RESOLUTION = "path_resolution"
    IO = "io"
    SYMLINK = "symlink"


class DootError(Exception):
    """
    Base error carrying a kind and a chain of messages.

    The chain is stored innermost-first. Each enclosing operation adds its
    description with `with_context`, and `str()` renders the chain from the
    outermost description down to the original cause.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str, *, chain: list[str] | None = None):
        self.chain: list[str] = list(chain) if chain else [message]
        super().__init__(str(self))

    def __str__(self) -> str:
        return ": ".join(reversed(self.chain))

    @property
    def root_message(self) -> str:
        """Innermost message of the chain."""
        return self.chain[0]

    def with_context(self, description: str) -> "DootError":
        """
        Return a copy of this error wrapped by an enclosing description.

        Args:
            description: What the enclosing operation was doing.

        Returns:
            New error of the same type with the description appended.
        """
        wrapped = type(self)(description, chain=[*self.chain, description])
        wrapped.__cause__ = self.__cause__ or self
        return wrapped


class ConfigurationError(DootError):
    """Unsupported version, unreadable config, or unknown group/resolver/plan."""

    kind = ErrorKind.CONFIGURATION


class PatternError(DootError):
    """Malformed ignore glob."""

    kind = ErrorKind.PATTERN


class PathResolutionError(DootError):
    """Resolver string could not be expanded."""

    kind = ErrorKind.PATH_RESOLUTION


class FileIOError(DootError):
    """Filesystem read, write or remove failure."""

    kind = ErrorKind.IO


class SymlinkError(DootError):
    """Symlink creation failure."""

    kind = ErrorKind.SYMLINK
