# Doot Output Module
# Console output and diff display

from doot.output.console import Console, create_console
from doot.output.diff import DiffHunk, DiffLine, compute_hunks, format_line, render_diff

__all__ = [
    "Console",
    "create_console",
    "DiffHunk",
    "DiffLine",
    "compute_hunks",
    "format_line",
    "render_diff",
]
