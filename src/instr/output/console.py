"""Rich Console factory and theme for instr output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INSTR_THEME = Theme(
    {
        "instr.ok": "bold green",
        "instr.error": "bold red",
        "instr.warning": "bold yellow",
        "instr.op": "bold cyan",
        "instr.key": "dim",
        "instr.path": "dim",
        "instr.create": "green",
        "instr.remove": "red",
        "instr.skip": "yellow",
        "instr.kind.tracked-symlink": "green",
        "instr.kind.foreign-symlink": "blue",
        "instr.kind.regular-file": "default",
        "instr.kind.broken-symlink": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=INSTR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    return f"instr.kind.{kind}"
