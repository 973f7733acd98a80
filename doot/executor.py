# Doot Executor
# Plan display, interactive confirmation and fail-fast application

import logging
import sys
from typing import Optional, TextIO

from doot.config.schema import Mode
from doot.errors import DootError
from doot.output.console import Console
from doot.output.diff import render_diff
from doot.store.base import Store
from doot.store.link import LinkStore
from doot.sync.plan import FileEntry, Plan

logger = logging.getLogger(__name__)

PROMPT = "\nProceed? [y/N/d] "
USAGE_HINT = "Invalid option. Use 'y' to proceed, 'n' to abort, or 'd' to show diffs."


class Executor:
    """
    Shows a plan, asks for confirmation and applies accepted changes.

    Entries are applied in group order, then entry order. The first failure
    stops the run; entries already applied stay applied.
    """

    def __init__(
        self,
        store: Store,
        mode: Mode,
        *,
        console: Optional[Console] = None,
        input_stream: Optional[TextIO] = None,
    ):
        """
        Initialize executor.

        Args:
            store: Store used for reading, writing and linking.
            mode: Configured materialization mode.
            console: Console for output (creates one if not provided).
            input_stream: Stream answers are read from (default: stdin).
        """
        if mode == Mode.LINK and not isinstance(store, LinkStore):
            raise ValueError(f"{store!r} cannot materialize symlinks")

        self.store = store
        self.mode = mode
        self.console = console or Console()
        self.input_stream = input_stream

    def display(self, plan: Plan, operation: str) -> None:
        """Print the plan grouped by group name."""
        self.console.print_plan(plan, operation)

    def confirm(self, plan: Plan) -> bool:
        """
        Ask whether to apply the plan until the answer is y, n or empty.

        `d` prints the diff of every pending entry and asks again. End of
        input counts as an empty answer.

        Returns:
            True if the user accepted.
        """
        stream = self.input_stream or sys.stdin

        while True:
            self.console.prompt(PROMPT)
            answer = stream.readline().strip().lower()

            if answer == "y":
                return True
            if answer in ("n", ""):
                return False
            if answer == "d":
                self.show_diffs(plan)
            else:
                self.console.print(USAGE_HINT)

    def show_diffs(self, plan: Plan) -> None:
        """Print a diff from destination to source for every pending entry."""
        self.console.print()
        for group in plan.groups:
            for entry in group.entries:
                if not entry.needs_action:
                    continue
                self.show_entry_diff(entry, group.group_name)

    def show_entry_diff(self, entry: FileEntry, group_name: str) -> None:
        old_content = self.store.read(entry.destination) if self.store.exists(entry.destination) else b""
        new_content = self.store.read(entry.source)
        render_diff(self.console.rich, f"{group_name}/{entry.relative_path}", old_content, new_content)

    def apply(self, plan: Plan) -> int:
        """
        Apply every pending entry.

        Returns:
            Number of entries applied.

        Raises:
            DootError: The first failure, wrapped with the entry being applied.
        """
        applied = 0

        for group in plan.groups:
            if not group.has_changes:
                continue

            self.console.print(f"  {group.group_name}:", markup=False)
            for entry in group.entries:
                if not entry.needs_action:
                    continue
                try:
                    self.apply_entry(entry)
                except DootError as e:
                    raise e.with_context(f"Failed to apply {group.group_name}/{entry.relative_path}") from e
                self.console.print_applied(entry.relative_path, entry.status)
                applied += 1

        return applied

    def apply_entry(self, entry: FileEntry) -> None:
        """Materialize one entry: copy content, or link to the source in link mode."""
        logger.debug("Applying %s -> %s (%s)", entry.source, entry.destination, self.mode.value)

        if self.mode == Mode.LINK:
            self.store.create_symlink(entry.source, entry.destination)
        else:
            content = self.store.read(entry.source)
            self.store.write(entry.destination, content)

    def run(self, plan: Plan, operation: str, skip_confirm: bool = False) -> bool:
        """
        Display, confirm and apply.

        Args:
            plan: Plan to run.
            operation: Label such as "Export plan 'all'".
            skip_confirm: Apply without asking.

        Returns:
            True if changes were applied.
        """
        self.display(plan, operation)

        if not plan.has_changes:
            self.console.print("\nNothing to do.")
            return False

        if not skip_confirm and not self.confirm(plan):
            self.console.print("\nAborted.")
            return False

        self.console.print("\nExecuting...\n")
        self.apply(plan)
        self.console.print("\nDone!")
        return True
