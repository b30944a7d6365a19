"""Command: library initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instr.commands._base import InstrCommand

if TYPE_CHECKING:
    from instr.commands._context import AppContext


@click.command(
    "init",
    cls=InstrCommand,
    examples="""\
  instr init
  instr -L ~/dotfiles/instructions init
  instr init --force""",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config.yaml.")
@click.pass_obj
def init_cmd(app: AppContext, force: bool) -> None:
    """Create the library skeleton (core/, domains/, tools/) and config.yaml."""
    config_file = app.settings.config_file
    if force and config_file.exists() and app.interactive:
        click.confirm(f"Overwrite {config_file}?", abort=True)
    app.emit(app.library_service().init(force=force))
