"""Command: classify what sits in a project's instructions directory."""

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
  instr status
  instr status ~/work/shop-api
  instr --json status .""",
)
@click.argument("path", required=False, type=PROJECT_PATH)
@click.option("--category", default=None, help="Report this category instead of resolving one.")
@click.pass_obj
def status(app: AppContext, path: Path | None, category: str | None) -> None:
    """Show each instruction entry of a project and its kind."""
    app.emit(app.library_service().status(path or Path.cwd(), category=category))
