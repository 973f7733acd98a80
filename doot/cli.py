"""Click-based CLI for Doot - dotfile import/export."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import click

from doot import __version__
from doot.config import load_config
from doot.errors import DootError
from doot.executor import Executor
from doot.logger import setup_logging
from doot.output.console import Console, create_console
from doot.runner import Target, TargetKind, run_export, run_import
from doot.store import create_store
from doot.sync.status import StatusChecker


class Options:
    """Global options shared by every subcommand."""

    def __init__(self, config_path: Optional[Path], yes: bool, verbose: bool):
        self.config_path = config_path
        self.yes = yes
        self.verbose = verbose
        self.console = create_console(verbose=verbose)


pass_options = click.make_pass_decorator(Options)


def _fail(console: Console, error: DootError) -> None:
    console.print_error(str(error))
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="doot")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (default: $DOOT_CONFIG or ./doot.yaml)",
)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging and unchanged entries in status")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], yes: bool, verbose: bool) -> None:
    """Doot - import and export dotfiles between this repository and the system.

    \b
    Each group is a directory here, mapped per resolver to a target location.
    import: target location -> group directory
    export: group directory -> target location
    """
    setup_logging(verbose)
    ctx.obj = Options(config_path, yes, verbose)


def _transfer(options: Options, target: Target, runner: Callable[..., bool]) -> None:
    try:
        config = load_config(options.config_path)
        store = create_store(config.mode)
        executor = Executor(
            store,
            config.mode,
            console=options.console,
            input_stream=click.get_text_stream("stdin"),
        )
        runner(config, executor, target, skip_confirm=options.yes)
    except DootError as e:
        _fail(options.console, e)


def _add_target_commands(parent: click.Group, runner: Callable[..., bool], verb: str) -> None:
    """Attach `group` and `plan` subcommands running the given direction."""

    @parent.command("group", help=f"{verb} a single group.")
    @click.argument("group")
    @click.argument("resolver")
    @pass_options
    def group_cmd(options: Options, group: str, resolver: str) -> None:
        _transfer(options, Target(TargetKind.GROUP, group, resolver), runner)

    @parent.command("plan", help=f"{verb} every group of a plan.")
    @click.argument("plan")
    @click.argument("resolver")
    @pass_options
    def plan_cmd(options: Options, plan: str, resolver: str) -> None:
        _transfer(options, Target(TargetKind.PLAN, plan, resolver), runner)


@cli.group("import")
def import_cmd() -> None:
    """Import files from the system into the repository."""


@cli.group("export")
def export_cmd() -> None:
    """Export files from the repository to the system."""


_add_target_commands(import_cmd, run_import, "Import")
_add_target_commands(export_cmd, run_export, "Export")


@cli.command("list")
@pass_options
def list_cmd(options: Options) -> None:
    """List all plans, groups, and resolvers."""
    try:
        config = load_config(options.config_path)
    except DootError as e:
        _fail(options.console, e)
        return

    options.console.print_config_tree(config)


@cli.command()
@click.argument("resolver")
@pass_options
def status(options: Options, resolver: str) -> None:
    """Show how managed groups differ from RESOLVER's targets, without changing anything."""
    try:
        config = load_config(options.config_path)
        checker = StatusChecker(config, create_store(config.mode), resolver)
        group_results = checker.check_all_groups()
        plan_results = checker.check_all_plans(group_results)
    except DootError as e:
        _fail(options.console, e)
        return

    options.console.print_status(resolver, group_results, plan_results)


if __name__ == "__main__":
    cli()
