# Doot Runner
# Builds import/export plans for a group or plan target and hands them to the executor

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from doot.config.schema import DootConfig
from doot.executor import Executor
from doot.ignore import IGNORE_FILENAME, IgnoreRules
from doot.store.base import Store
from doot.sync.plan import Plan, PlanBuilder
from doot.utils.paths import resolve_path

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which way files flow."""

    IMPORT = "import"  # target location -> managed group directory
    EXPORT = "export"  # managed group directory -> target location


class TargetKind(str, Enum):
    GROUP = "group"
    PLAN = "plan"


@dataclass(frozen=True)
class Target:
    """A single group or a configured plan, paired with a resolver name."""

    kind: TargetKind
    name: str
    resolver: str

    def operation_label(self, direction: Direction) -> str:
        """Label such as "Import group 'bash'"."""
        return f"{direction.value.capitalize()} {self.kind.value} '{self.name}'"


def resolve_groups(config: DootConfig, target: Target) -> list[str]:
    """
    Get the groups a target covers.

    Raises:
        ConfigurationError: If the group or plan is not configured.
    """
    if target.kind == TargetKind.GROUP:
        config.get_group(target.name)
        return [target.name]
    return config.get_plan_groups(target.name)


def build_plan(
    config: DootConfig,
    store: Store,
    target: Target,
    direction: Direction,
    *,
    base_dir: Optional[Path] = None,
) -> Plan:
    """
    Build a plan covering every group of the target.

    Args:
        config: Loaded configuration.
        store: Store used for classification.
        target: Group or plan to operate on.
        direction: Import or export.
        base_dir: Directory holding the managed group directories (default: cwd).

    Returns:
        Plan with one GroupPlan per group, in target order.

    Raises:
        ConfigurationError: Unknown group, plan, or resolver.
        PathResolutionError: A resolver string cannot be expanded.
        PatternError: A group's ignore file is malformed.
    """
    base_dir = base_dir if base_dir is not None else Path.cwd()
    plan = Plan()

    for group_name in resolve_groups(config, target):
        resolved_path = resolve_path(config.get_resolver(group_name, target.resolver))
        group_dir = base_dir / group_name
        logger.debug("Group %s: %s <-> %s", group_name, group_dir, resolved_path)

        ignore_rules = IgnoreRules.load(group_dir / IGNORE_FILENAME)
        builder = PlanBuilder(store, ignore_rules)

        if direction == Direction.IMPORT:
            entries = builder.build_import(group_dir, resolved_path)
        else:
            entries = builder.build_export(group_dir, resolved_path)

        plan.add_group(group_name, entries)

    return plan


def run(
    config: DootConfig,
    executor: Executor,
    target: Target,
    direction: Direction,
    *,
    skip_confirm: bool = False,
    base_dir: Optional[Path] = None,
) -> bool:
    """
    Build the plan for a target and run it through the executor.

    Returns:
        True if changes were applied.
    """
    plan = build_plan(config, executor.store, target, direction, base_dir=base_dir)
    return executor.run(plan, target.operation_label(direction), skip_confirm)


def run_import(
    config: DootConfig,
    executor: Executor,
    target: Target,
    *,
    skip_confirm: bool = False,
    base_dir: Optional[Path] = None,
) -> bool:
    """Copy or link files from the target location into managed storage."""
    return run(config, executor, target, Direction.IMPORT, skip_confirm=skip_confirm, base_dir=base_dir)


def run_export(
    config: DootConfig,
    executor: Executor,
    target: Target,
    *,
    skip_confirm: bool = False,
    base_dir: Optional[Path] = None,
) -> bool:
    """Copy or link managed files out to the target location."""
    return run(config, executor, target, Direction.EXPORT, skip_confirm=skip_confirm, base_dir=base_dir)
