# Doot Diff Display
# Hunk computation and rendering for pending entries

import difflib
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console as RichConsole
from rich.syntax import Syntax
from rich.text import Text

CONTEXT_LINES = 3

DELETE_TINT = "on #3f0d12"
INSERT_TINT = "on #12361c"

_CHANGE_STYLES = {
    "delete": ("bold red", DELETE_TINT),
    "insert": ("bold green", INSERT_TINT),
}


@dataclass(frozen=True)
class DiffLine:
    """One rendered line of a hunk."""

    tag: str  # 'equal', 'insert', 'delete'
    number: Optional[int]
    text: str

    @property
    def sign(self) -> str:
        return {"insert": "+", "delete": "-"}.get(self.tag, " ")


@dataclass
class DiffHunk:
    """A changed region with its surrounding context lines."""

    lines: list[DiffLine] = field(default_factory=list)

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.tag == "insert")

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.tag == "delete")


def decode_content(content: bytes) -> str:
    """Decode file bytes for display, replacing invalid UTF-8."""
    return content.decode("utf-8", errors="replace")


def compute_hunks(old_content: str, new_content: str, *, context_lines: int = CONTEXT_LINES) -> list[DiffHunk]:
    """
    Split the difference between two texts into hunks.

    Deleted lines are numbered in the old text, inserted and context lines
    in the new text.

    Args:
        old_content: Current destination content.
        new_content: Source content that would replace it.
        context_lines: Unchanged lines kept around each change.

    Returns:
        Hunks in file order. Empty if the texts are identical.
    """
    old_lines = old_content.splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)

    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    hunks: list[DiffHunk] = []

    for group in matcher.get_grouped_opcodes(context_lines):
        hunk = DiffHunk()
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                for offset, line in enumerate(new_lines[j1:j2]):
                    hunk.lines.append(DiffLine("equal", j1 + offset + 1, line))
                continue
            if tag in ("replace", "delete"):
                for offset, line in enumerate(old_lines[i1:i2]):
                    hunk.lines.append(DiffLine("delete", i1 + offset + 1, line))
            if tag in ("replace", "insert"):
                for offset, line in enumerate(new_lines[j1:j2]):
                    hunk.lines.append(DiffLine("insert", j1 + offset + 1, line))
        hunks.append(hunk)

    return hunks


def render_diff(
    console: RichConsole,
    label: str,
    old_content: bytes,
    new_content: bytes,
    *,
    context_lines: int = CONTEXT_LINES,
) -> list[DiffHunk]:
    """
    Print a line-numbered diff from destination content to source content.

    Args:
        console: Rich console to print to.
        label: `group/relative_path` shown in the header.
        old_content: Destination bytes (empty if absent).
        new_content: Source bytes.
        context_lines: Unchanged lines kept around each change.

    Returns:
        The hunks that were printed.
    """
    old_text = decode_content(old_content)
    new_text = decode_content(new_content)

    console.print(Text(f"--- {label} (destination)", style="red"))
    console.print(Text(f"+++ {label} (source)", style="green"))
    console.print(Text("─" * 60, style="dim"))

    lexer = Syntax.guess_lexer(label, code=new_text)
    syntax = Syntax("", lexer, theme="monokai")

    hunks = compute_hunks(old_text, new_text, context_lines=context_lines)
    for idx, hunk in enumerate(hunks):
        if idx > 0:
            console.print(Text("───", style="dim"))
        for line in hunk.lines:
            console.print(format_line(line, syntax), soft_wrap=True)

    console.print()
    return hunks


def format_line(line: DiffLine, syntax: Syntax) -> Text:
    """Render one hunk line: number, sign, then highlighted content. Changed lines are tinted."""
    number = f"{line.number:4}" if line.number is not None else "    "
    content = line.text.rstrip("\r\n")

    text = Text()
    text.append(number, style="dim on grey15")
    text.append(" ")

    sign_style, tint = _CHANGE_STYLES.get(line.tag, ("", None))
    text.append(f"{line.sign} ", style=sign_style)

    highlighted = syntax.highlight(content)
    highlighted.rstrip()
    start = len(text)
    text.append_text(highlighted)

    if tint is not None:
        text.stylize(tint, start)

    return text
