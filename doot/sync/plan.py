# Doot Plan
# Classified file entries per group and the builder that produces them

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

from doot.errors import FileIOError
from doot.ignore import IGNORE_FILENAME, IgnoreRules
from doot.store.base import Store
from doot.utils.paths import relative_key, walk_files

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    """Reconciliation result for one source/destination pair."""

    SAME = "same"
    CREATE = "create"
    OVERWRITE = "overwrite"


@dataclass(frozen=True)
class FileEntry:
    """One file to reconcile, identified by its root-relative path."""

    relative_path: str
    source: Path
    destination: Path
    status: FileStatus

    @property
    def needs_action(self) -> bool:
        """Check if applying the plan touches this entry."""
        return self.status != FileStatus.SAME


@dataclass(frozen=True)
class GroupPlan:
    """Entries of a single group, sorted by relative path."""

    group_name: str
    entries: tuple[FileEntry, ...] = ()

    @property
    def has_changes(self) -> bool:
        return any(entry.needs_action for entry in self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def count_by_status(self, status: FileStatus) -> int:
        return sum(1 for entry in self.entries if entry.status == status)


@dataclass
class Plan:
    """
    Groups in the order they were added.

    `is_empty` and `has_changes` are independent: a plan whose entries are
    all SAME is not empty but has no changes.
    """

    groups: list[GroupPlan] = field(default_factory=list)

    def add_group(self, group_name: str, entries: list[FileEntry]) -> GroupPlan:
        """Append a group's entries to the plan."""
        group = GroupPlan(group_name=group_name, entries=tuple(entries))
        self.groups.append(group)
        return group

    @property
    def has_changes(self) -> bool:
        return any(group.has_changes for group in self.groups)

    @property
    def is_empty(self) -> bool:
        return all(group.is_empty for group in self.groups)

    def total_count_by_status(self, status: FileStatus) -> int:
        return sum(group.count_by_status(status) for group in self.groups)

    def counts(self) -> dict[FileStatus, int]:
        """Entry counts for every status across all groups."""
        return {status: self.total_count_by_status(status) for status in FileStatus}


def _sort_key(entry: FileEntry) -> tuple[str, ...]:
    # component-wise, so "a/b" sorts before "a.txt"
    return PurePosixPath(entry.relative_path).parts


class PlanBuilder:
    """
    Walks a source tree and classifies every file against a destination tree.

    Ignore rules are evaluated per file on the relative path. A directory is
    never pruned as a whole, so a rule meant for a subtree must match each
    file inside it.
    """

    def __init__(self, store: Store, ignore_rules: IgnoreRules):
        """
        Initialize plan builder.

        Args:
            store: Store used for existence checks and content comparison.
            ignore_rules: Rules of the group being planned.
        """
        self.store = store
        self.ignore_rules = ignore_rules

    def build_import(self, group_dir: Path, resolved_path: Path) -> list[FileEntry]:
        """
        Plan copying files from the target location into the managed group directory.

        Args:
            group_dir: Managed group directory (destination).
            resolved_path: Expanded target location (source).

        Returns:
            Entries sorted by relative path.
        """
        return self._build(source_root=resolved_path, destination_root=group_dir)

    def build_export(self, group_dir: Path, resolved_path: Path) -> list[FileEntry]:
        """
        Plan copying files from the managed group directory to the target location.

        The group's rule file is never exported.

        Args:
            group_dir: Managed group directory (source).
            resolved_path: Expanded target location (destination).

        Returns:
            Entries sorted by relative path.
        """
        return self._build(source_root=group_dir, destination_root=resolved_path, exclude={IGNORE_FILENAME})

    def _build(self, source_root: Path, destination_root: Path, exclude: set[str] | None = None) -> list[FileEntry]:
        entries: list[FileEntry] = []

        for source in walk_files(source_root):
            relative = relative_key(source, source_root)

            if exclude and relative in exclude:
                continue

            if not self.ignore_rules.is_included(relative):
                logger.debug("Ignored %s", relative)
                continue

            destination = destination_root / relative
            status = self.compute_status(source, destination)
            logger.debug("%s: %s", relative, status.value)

            entries.append(
                FileEntry(
                    relative_path=relative,
                    source=source,
                    destination=destination,
                    status=status,
                )
            )

        entries.sort(key=_sort_key)
        return entries

    def compute_status(self, source: Path, destination: Path) -> FileStatus:
        """
        Classify a source/destination pair.

        Args:
            source: Source file.
            destination: Destination file.

        Returns:
            CREATE if destination is absent, SAME if contents match, otherwise OVERWRITE.
        """
        if not self.store.exists(destination):
            return FileStatus.CREATE

        try:
            same = self.store.compare(source, destination)
        except FileIOError as e:
            logger.debug("Comparison failed, treating as changed: %s", e)
            same = False

        return FileStatus.SAME if same else FileStatus.OVERWRITE
