"""Command: interactively choose which library files a project links."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from instr.commands._base import PROJECT_PATH, InstrCommand

if TYPE_CHECKING:
    from instr.commands._context import AppContext


def parse_selection(text: str, count: int) -> list[int]:
    """Parse ``"1,3-5"`` into zero-based indices, in order, without repeats.

    ``none`` selects nothing.  Raises :class:`click.BadParameter` for
    anything outside ``1..count``.
    """
    text = text.strip()
    if text.lower() == "none":
        return []
    picked: list[int] = []
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        lo, sep, hi = part.partition("-")
        try:
            start = int(lo)
            end = int(hi) if sep else start
        except ValueError:
            raise click.BadParameter(f"not a number or range: {part!r}") from None
        if start > end or start < 1 or end > count:
            raise click.BadParameter(f"out of range 1-{count}: {part!r}")
        for number in range(start, end + 1):
            if number - 1 not in picked:
                picked.append(number - 1)
    return picked


def _format_default(indices: list[int]) -> str:
    return ",".join(str(i + 1) for i in indices) or "none"


@click.command(
    cls=InstrCommand,
    examples="""\
  instr pick
  instr pick ~/work/shop-frontend
  instr pick --dry-run""",
)
@click.argument("path", required=False, type=PROJECT_PATH)
@click.option("--dry-run", is_flag=True, help="Show the plan without changing anything.")
@click.pass_obj
def pick(app: AppContext, path: Path | None, dry_run: bool) -> None:
    """Choose library files by number; the project converges to the choice."""
    from instr.domain.references import LibraryReference
    from instr.services.result import ServiceError, ServiceResult

    project = path or Path.cwd()
    service = app.sync_service()

    if not app.interactive:
        app.emit(
            ServiceResult(
                ok=False,
                op="pick",
                error=ServiceError(
                    code="INTERACTIVE_REQUIRED",
                    message="pick needs a terminal; use 'instr add' or 'instr sync' instead",
                ),
            )
        )
        return

    state = service.selection_state(project)
    if not state.ok:
        app.emit(state)
        return

    candidates: list[str] = state.data["references"]
    linked = set(state.data["linked"])
    if not candidates:
        click.echo("Library is empty; nothing to pick.", err=True)
    for number, rel_path in enumerate(candidates, start=1):
        mark = "*" if rel_path in linked else " "
        click.echo(f"{mark} {number:>3}  {rel_path}", err=True)

    default = _format_default([i for i, rel in enumerate(candidates) if rel in linked])
    while True:
        answer = click.prompt("Select (e.g. 1,3-5 or none)", default=default, err=True)
        try:
            indices = parse_selection(answer, len(candidates))
        except click.BadParameter as exc:
            click.echo(f"Error: {exc.message}", err=True)
            continue
        break

    chosen = [LibraryReference.from_rel_path(candidates[i]) for i in indices]
    chosen = [ref for ref in chosen if ref is not None]
    app.emit(service.apply_selection(chosen, project, dry_run=dry_run))
