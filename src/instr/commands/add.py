"""Command: link a single library file (or domain) into a project."""

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
  instr add tools/docker
  instr add domains/web/react-patterns ~/work/shop-frontend
  instr add domains/backend
  instr add core/coding-standards.md --dry-run""",
)
@click.argument("reference")
@click.argument("path", required=False, type=PROJECT_PATH)
@click.option("--dry-run", is_flag=True, help="Show the plan without changing anything.")
@click.pass_obj
def add(app: AppContext, reference: str, path: Path | None, dry_run: bool) -> None:
    """Link REFERENCE (core/NAME, domains/DOMAIN[/NAME], tools/NAME) into a project."""
    app.emit(app.sync_service().add(reference, path or Path.cwd(), dry_run=dry_run))
