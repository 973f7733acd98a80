# Doot Console Output
# Rich-based console output for plans, status reports and configuration

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from doot.config.schema import DootConfig
from doot.sync.plan import FileStatus, Plan
from doot.sync.status import FileState, GroupStatus, GroupStatusResult, PlanStatusResult

_ENTRY_STYLES = {
    FileStatus.SAME: ("blue", "✓", "same"),
    FileStatus.CREATE: ("green", "+", "create"),
    FileStatus.OVERWRITE: ("yellow", "~", "overwrite"),
}

_GROUP_STATUS_STYLES = {
    GroupStatus.IN_SYNC: ("green", "✓", "in sync"),
    GroupStatus.OUT_OF_SYNC: ("yellow", "~", "out of sync"),
    GroupStatus.NEW: ("cyan", "+", "new"),
    GroupStatus.SKIPPED: ("dim", "○", "skipped"),
}

_FILE_STATE_STYLES = {
    FileState.IN_SYNC: ("green", "✓", "in sync"),
    FileState.MODIFIED: ("yellow", "~", "modified"),
    FileState.NEW: ("cyan", "+", "new"),
}


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for import, export, status and list.
    """

    def __init__(self, *, verbose: bool = False, colored: Optional[bool] = None):
        """
        Initialize console.

        Args:
            verbose: Show unchanged entries in status output.
            colored: Force colors on or off. None auto-detects a terminal.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=colored is False, soft_wrap=True)

    @property
    def rich(self) -> RichConsole:
        """Underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_plan(self, plan: Plan, operation: str) -> None:
        """
        Print every group's entries with their status, then a summary.

        Args:
            plan: Plan to display.
            operation: Label such as "Import group 'bash'".
        """
        if plan.is_empty:
            self._console.print(f"No files to process for {escape(operation)}.")
            return

        self._console.print(f"\n[bold]{escape(operation)}[/bold]:\n")

        for group in plan.groups:
            self._console.print(f"  [bold]{escape(group.group_name)}[/bold]:")

            if group.is_empty:
                self._console.print("    [dim](no files)[/dim]")
            for entry in group.entries:
                color, icon, label = _ENTRY_STYLES[entry.status]
                self._console.print(
                    f"    \\[[{color}]{icon}[/{color}]] {escape(entry.relative_path)} ([{color}]{label}[/{color}])"
                )
            self._console.print()

        counts = plan.counts()
        self._console.print(
            f"Summary: {counts[FileStatus.SAME]} same, "
            f"{counts[FileStatus.CREATE]} to create, "
            f"{counts[FileStatus.OVERWRITE]} to overwrite"
        )

    def print_applied(self, relative_path: str, status: FileStatus) -> None:
        """Print one applied entry."""
        action = "Created" if status == FileStatus.CREATE else "Updated"
        self._console.print(f"    {action} {escape(relative_path)}")

    def print_status(
        self,
        resolver: str,
        group_results: list[GroupStatusResult],
        plan_results: list[PlanStatusResult],
    ) -> None:
        """
        Print group divergence with file details, then plan divergence.

        Args:
            resolver: Resolver the report was computed for.
            group_results: Per-group results.
            plan_results: Per-plan results.
        """
        self._console.print(f"[bold]Status for resolver '{escape(resolver)}'[/bold]")

        if not group_results:
            self._console.print("[dim]No groups configured[/dim]")

        for result in group_results:
            color, icon, label = _GROUP_STATUS_STYLES[result.status]
            self._console.print(
                f"\n[{color}]{icon}[/{color}] [bold]{escape(result.name)}[/bold] - [{color}]{label}[/{color}]"
            )

            for entry in result.files:
                if entry.state == FileState.IN_SYNC and not self.verbose:
                    continue
                f_color, f_icon, f_label = _FILE_STATE_STYLES[entry.state]
                self._console.print(
                    f"    [{f_color}]{f_icon}[/{f_color}] {escape(entry.relative_path)} ({f_label})"
                )

        if not plan_results:
            return

        table = Table(title="Plans", show_header=True, header_style="bold")
        table.add_column("Plan", style="cyan")
        table.add_column("Status")

        for result in plan_results:
            color, _, label = _GROUP_STATUS_STYLES[result.status]
            table.add_row(escape(result.name), f"[{color}]{label}[/{color}]")

        self._console.print()
        self._console.print(table)

    def print_config_tree(self, config: DootConfig) -> None:
        """Print configured plans and groups with their resolvers, sorted by name."""
        plans = Tree("[bold]Plans[/bold]")
        for name in sorted(config.plans):
            members = config.plans[name]
            if members is None:
                plans.add(f"{escape(name)} [dim](all groups)[/dim]")
            else:
                plans.add(escape(name)).add(escape(", ".join(members)))

        groups = Tree("[bold]Groups[/bold]")
        for name in sorted(config.groups):
            branch = groups.add(escape(name))
            resolvers = config.groups[name]
            for resolver in sorted(resolvers):
                branch.add(f"{escape(resolver)} → {escape(resolvers[resolver])}")

        self._console.print(plans)
        self._console.print()
        self._console.print(groups)

    def prompt(self, message: str) -> None:
        """Print a prompt without a trailing newline."""
        self._console.print(message, end="", markup=False, highlight=False)


def create_console(*, verbose: bool = False, colored: Optional[bool] = None) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Show unchanged entries in status output.
        colored: Force colors on or off. None auto-detects a terminal.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
