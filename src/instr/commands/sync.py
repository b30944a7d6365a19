"""Command: converge projects to their category's instruction set."""

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
  instr sync
  instr sync ~/work/shop-frontend ~/work/shop-api
  instr sync . --category web
  instr sync --dry-run
  instr sync --prune-broken""",
)
@click.argument("paths", nargs=-1, type=PROJECT_PATH)
@click.option("--category", default=None, help="Use this category instead of resolving one.")
@click.option("--dry-run", is_flag=True, help="Show the plan without changing anything.")
@click.option(
    "--prune-broken",
    is_flag=True,
    help="Also remove broken symlinks that point into the library.",
)
@click.pass_obj
def sync(
    app: AppContext,
    paths: tuple[Path, ...],
    category: str | None,
    dry_run: bool,
    prune_broken: bool,
) -> None:
    """Link each project's category files and unlink the rest."""
    app.emit(
        app.sync_service().sync(
            list(paths) or [Path.cwd()],
            category=category,
            dry_run=dry_run,
            prune_broken=prune_broken,
        )
    )
