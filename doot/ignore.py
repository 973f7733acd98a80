# Doot Ignore Rules
# Parsing and last-match-wins evaluation of .dootignore files

import fnmatch
import logging
import re
from dataclasses import dataclass
from pathlib import Path

import pathspec

from doot.errors import FileIOError, PatternError

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".dootignore"


@dataclass(frozen=True)
class IgnorePattern:
    """A single compiled glob with its negation flag."""

    glob: str
    negated: bool
    regex: re.Pattern

    def matches(self, path: str) -> bool:
        """Check whether a forward-slash relative path matches the glob."""
        return self.regex.match(path) is not None


def compile_glob(glob: str) -> re.Pattern:
    """
    Compile a shell-style glob.

    `*` and `?` also match `/`, so a pattern is tested against the whole
    relative path rather than one component. A `**/` component matches zero
    or more directories: `**/*.swp` matches `a.swp` and `dir/a.swp`.

    Args:
        glob: Glob expression.

    Returns:
        Compiled regular expression.

    Raises:
        PatternError: If the glob is malformed.
    """
    _validate_glob(glob)
    variants = dict.fromkeys(_expand_globstar(glob))
    return re.compile("|".join(fnmatch.translate(variant) for variant in variants))


def _expand_globstar(glob: str) -> list[str]:
    """Rewrite every `**/` as either nothing or `*/`, yielding one fnmatch glob per combination."""
    head, sep, tail = glob.partition("**/")
    if not sep:
        return [glob]

    rests = _expand_globstar(tail)
    return [head + rest for rest in rests] + [head + "*/" + rest for rest in rests]


def _validate_glob(glob: str) -> None:
    """Reject globs fnmatch would silently treat as literals."""
    if "***" in glob:
        raise PatternError(f"Invalid pattern '{glob}': wildcards are either regular `*` or recursive `**`")

    for match in re.finditer(r"\*\*", glob):
        start, end = match.span()
        before_ok = start == 0 or glob[start - 1] == "/"
        after_ok = end == len(glob) or glob[end] == "/"
        if not (before_ok and after_ok):
            raise PatternError(f"Invalid pattern '{glob}': recursive wildcards must form a single path component")

    i = 0
    while i < len(glob):
        if glob[i] == "[":
            # `]` directly after `[` or `[!` is a literal member of the class
            j = i + 1
            if j < len(glob) and glob[j] == "!":
                j += 1
            if j < len(glob) and glob[j] == "]":
                j += 1
            close = glob.find("]", j)
            if close == -1:
                raise PatternError(f"Invalid pattern '{glob}': invalid range pattern")
            i = close
        i += 1


class IgnoreRules:
    """
    Ordered ignore patterns from a group's rule file.

    Every matching pattern overwrites the verdict, so the last match wins
    and the order of lines in the file matters.
    """

    def __init__(self, patterns: list[IgnorePattern] | None = None):
        self.patterns: list[IgnorePattern] = list(patterns or [])

    def __len__(self) -> int:
        return len(self.patterns)

    @classmethod
    def load(cls, path: Path) -> "IgnoreRules":
        """
        Load rules from a file.

        Args:
            path: Path to the rule file.

        Returns:
            Parsed rules, or an empty rule set if the file is absent.

        Raises:
            FileIOError: If the file exists but cannot be read.
            PatternError: If a line holds an invalid glob.
        """
        if not path.exists():
            logger.debug("No ignore file at %s", path)
            return cls()

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(f"Failed to read ignore file: {path}") from e

        try:
            return cls.parse(content)
        except PatternError as e:
            raise e.with_context(f"Failed to parse ignore file: {path}") from e

    @classmethod
    def parse(cls, content: str) -> "IgnoreRules":
        """
        Parse rule file content.

        Args:
            content: Text with one rule per line.

        Returns:
            Parsed rules in file order.

        Raises:
            PatternError: If a line holds an invalid glob.
        """
        patterns: list[IgnorePattern] = []

        for raw_line in content.splitlines():
            line = raw_line.strip()

            if not line or line.startswith("#"):
                continue

            idx = line.find(" #")
            if idx != -1:
                line = line[:idx].strip()

            negated = line.startswith("!")
            glob = line[1:] if negated else line

            patterns.append(IgnorePattern(glob=glob, negated=negated, regex=compile_glob(glob)))

        return cls(patterns)

    def is_ignored(self, path: str) -> bool:
        """Check whether a relative path is excluded."""
        ignored = False

        for pattern in self.patterns:
            if pattern.matches(path):
                ignored = not pattern.negated

        return ignored

    def is_included(self, path: str) -> bool:
        """Check whether a relative path takes part in reconciliation."""
        return not self.is_ignored(path)


def load_walk_spec(path: Path) -> pathspec.GitIgnoreSpec:
    """
    Load a rule file with gitignore semantics for pruning a tree walk.

    Unlike IgnoreRules, a bare name such as `plugins` matches a directory at
    any depth, and everything below an excluded directory stays excluded.

    Args:
        path: Path to the rule file.

    Returns:
        Compiled spec. Matches nothing if the file is absent.

    Raises:
        FileIOError: If the file exists but cannot be read.
        PatternError: If a line is not a valid gitignore pattern.
    """
    if not path.exists():
        return pathspec.GitIgnoreSpec.from_lines([])

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(f"Failed to read ignore file: {path}") from e

    try:
        return pathspec.GitIgnoreSpec.from_lines(lines)
    except ValueError as e:
        raise PatternError(f"Invalid pattern: {e}").with_context(f"Failed to parse ignore file: {path}") from e
