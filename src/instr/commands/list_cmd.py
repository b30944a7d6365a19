"""Command: show library contents (named list_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instr.commands._base import InstrCommand

if TYPE_CHECKING:
    from instr.commands._context import AppContext


@click.command(
    "list",
    cls=InstrCommand,
    examples="""\
  instr list
  instr --json list
  instr -L ~/dotfiles/instructions list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List library files, categories, and routing rules."""
    app.emit(app.library_service().list_library())
