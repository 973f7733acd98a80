# Doot Sync Module
# Reconciliation engine and status checker

from doot.sync.plan import FileEntry, FileStatus, GroupPlan, Plan, PlanBuilder
from doot.sync.status import (
    FileState,
    FileStatusEntry,
    GroupStatus,
    GroupStatusResult,
    PlanStatusResult,
    StatusChecker,
    aggregate_plan,
    classify_group,
)

__all__ = [
    # Plan
    "FileStatus",
    "FileEntry",
    "GroupPlan",
    "Plan",
    "PlanBuilder",
    # Status
    "FileState",
    "FileStatusEntry",
    "GroupStatus",
    "GroupStatusResult",
    "PlanStatusResult",
    "StatusChecker",
    "classify_group",
    "aggregate_plan",
]
