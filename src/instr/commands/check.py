"""Command: read-only report of what sync would change."""

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
  instr check
  instr check ~/work/*
  instr check --strict
  instr --json check . --category backend""",
)
@click.argument("paths", nargs=-1, type=PROJECT_PATH)
@click.option("--category", default=None, help="Use this category instead of resolving one.")
@click.option("--strict", is_flag=True, help="Exit non-zero if any project is out of sync.")
@click.pass_obj
def check(
    app: AppContext,
    paths: tuple[Path, ...],
    category: str | None,
    strict: bool,
) -> None:
    """Show the sync plan for each project without applying it."""
    app.emit(
        app.sync_service().check(list(paths) or [Path.cwd()], category=category, strict=strict)
    )
