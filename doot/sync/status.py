# Doot Status Checker
# Read-only divergence report between managed groups and one resolver's targets

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional

from doot.config.schema import DootConfig
from doot.errors import ConfigurationError, FileIOError
from doot.ignore import IGNORE_FILENAME, IgnoreRules, load_walk_spec
from doot.store.base import Store
from doot.utils.paths import VCS_DIRS, relative_key, resolve_path, walk_files

logger = logging.getLogger(__name__)


class FileState(str, Enum):
    """Divergence of one managed file from its target."""

    IN_SYNC = "in_sync"
    MODIFIED = "modified"
    NEW = "new"


class GroupStatus(str, Enum):
    """Divergence of a group or plan."""

    IN_SYNC = "in_sync"
    OUT_OF_SYNC = "out_of_sync"
    NEW = "new"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class FileStatusEntry:
    relative_path: str
    state: FileState


@dataclass
class GroupStatusResult:
    name: str
    status: GroupStatus
    files: list[FileStatusEntry] = field(default_factory=list)

    def count_by_state(self, state: FileState) -> int:
        return sum(1 for f in self.files if f.state == state)


@dataclass
class PlanStatusResult:
    name: str
    status: GroupStatus


def classify_group(states: Iterable[FileState]) -> GroupStatus:
    """
    Roll per-file states up to a group status.

    No files is NEW, all in sync is IN_SYNC, only NEW divergence is NEW.
    Any MODIFIED file makes the group OUT_OF_SYNC.
    """
    states = list(states)
    if not states:
        return GroupStatus.NEW

    diverged = [s for s in states if s != FileState.IN_SYNC]
    if not diverged:
        return GroupStatus.IN_SYNC
    if all(s == FileState.NEW for s in diverged):
        return GroupStatus.NEW
    return GroupStatus.OUT_OF_SYNC


def aggregate_plan(statuses: Iterable[GroupStatus]) -> GroupStatus:
    """
    Roll member group statuses up to a plan status.

    SKIPPED members do not participate. OUT_OF_SYNC wins over NEW, NEW wins
    over IN_SYNC. A plan without participating members is SKIPPED.
    """
    status = GroupStatus.IN_SYNC
    participated = False

    for member in statuses:
        if member == GroupStatus.SKIPPED:
            continue
        participated = True
        if member == GroupStatus.OUT_OF_SYNC:
            status = GroupStatus.OUT_OF_SYNC
        elif member == GroupStatus.NEW and status != GroupStatus.OUT_OF_SYNC:
            status = GroupStatus.NEW

    return status if participated else GroupStatus.SKIPPED


class StatusChecker:
    """
    Classifies managed groups against the targets of a single resolver.

    Never decides a direction and never writes.
    """

    def __init__(self, config: DootConfig, store: Store, resolver: str, base_dir: Optional[Path] = None):
        """
        Initialize status checker.

        Args:
            config: Loaded configuration.
            store: Store used for existence checks and content comparison.
            resolver: Resolver name to check every group against.
            base_dir: Directory holding the managed group directories (default: cwd).
        """
        self.config = config
        self.store = store
        self.resolver = resolver
        self.base_dir = base_dir if base_dir is not None else Path.cwd()

    def check_group(self, group_name: str) -> GroupStatusResult:
        """
        Check one group.

        Returns:
            SKIPPED if the group has no such resolver, NEW if its managed
            directory is missing, otherwise the rolled-up file states.

        Raises:
            PathResolutionError: If the resolver string cannot be expanded.
            PatternError: If the group's ignore file is malformed.
        """
        try:
            target = self.config.get_resolver(group_name, self.resolver)
        except ConfigurationError:
            logger.debug("Group %s has no resolver %s", group_name, self.resolver)
            return GroupStatusResult(name=group_name, status=GroupStatus.SKIPPED)

        resolved_path = resolve_path(target)
        group_dir = self.base_dir / group_name

        if not group_dir.exists():
            return GroupStatusResult(name=group_name, status=GroupStatus.NEW)

        rule_file = group_dir / IGNORE_FILENAME
        ignore_rules = IgnoreRules.load(rule_file)
        walk_spec = load_walk_spec(rule_file)

        files: list[FileStatusEntry] = []
        for source in walk_files(group_dir, skip_dirs=VCS_DIRS, ignore_spec=walk_spec):
            relative = relative_key(source, group_dir)

            if relative == IGNORE_FILENAME or not ignore_rules.is_included(relative):
                continue

            state = self.compute_file_state(source, resolved_path / relative)
            files.append(FileStatusEntry(relative_path=relative, state=state))

        files.sort(key=lambda f: PurePosixPath(f.relative_path).parts)

        return GroupStatusResult(
            name=group_name,
            status=classify_group(f.state for f in files),
            files=files,
        )

    def compute_file_state(self, source: Path, destination: Path) -> FileState:
        if not self.store.exists(destination):
            return FileState.NEW

        try:
            same = self.store.compare(source, destination)
        except FileIOError as e:
            logger.debug("Comparison failed, treating as modified: %s", e)
            same = False

        return FileState.IN_SYNC if same else FileState.MODIFIED

    def check_all_groups(self) -> list[GroupStatusResult]:
        """Check every configured group, sorted by name."""
        return [self.check_group(name) for name in sorted(self.config.groups)]

    def check_plan(self, plan_name: str, group_results: list[GroupStatusResult]) -> PlanStatusResult:
        """
        Aggregate already computed group results for one plan.

        Members without a result, and unknown plans, contribute nothing.
        """
        if plan_name in self.config.plans:
            members = self.config.get_plan_groups(plan_name)
        else:
            members = []

        by_name = {result.name: result for result in group_results}
        statuses = [by_name[name].status for name in members if name in by_name]

        return PlanStatusResult(name=plan_name, status=aggregate_plan(statuses))

    def check_all_plans(self, group_results: list[GroupStatusResult]) -> list[PlanStatusResult]:
        """Aggregate every configured plan, sorted by name."""
        return [self.check_plan(name, group_results) for name in sorted(self.config.plans)]
