"""Command: unlink tracked instruction links from a project."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from instr.commands._base import PROJECT_PATH, InstrCommand

if TYPE_CHECKING:
    from instr.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instr remove docker
  instr remove docker.md react-patterns.md --path ~/work/shop-frontend
  instr remove npm --dry-run""",
)
@click.argument("names", nargs=-1, required=True)
@click.option("--path", "path", type=PROJECT_PATH, default=None, help="Project directory.")
@click.option("--dry-run", is_flag=True, help="Show the plan without changing anything.")
@click.pass_obj
def remove(app: AppContext, names: tuple[str, ...], path: Path | None, dry_run: bool) -> None:
    """Unlink NAMES; only symlinks into the library are ever removed."""
    app.emit(app.sync_service().remove(names, path or Path.cwd(), dry_run=dry_run))
