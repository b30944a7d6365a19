"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; the caller gets the
rendered text back from :func:`render_result`.  Renderers are dispatched
by ``result.op``; unknown ops fall through to a generic key-value view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from instr.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from instr.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    line = Text("OK", style="instr.ok")
    line.append(f"  {result.op}", style="instr.op")
    if result.data.get("dry_run"):
        line.append("  (dry run)", style="dim")
    console.print(line)


def _field(console: Console, key: str, value: Any) -> None:
    line = Text(f"  {key}: ", style="instr.key")
    style = "instr.path" if key in ("path", "root", "directory", "config") else ""
    line.append(str(value), style=style)
    console.print(line)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    if not result.meta or "telemetry" not in result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    _render_span(console, result.meta["telemetry"], indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = Text(" " * indent)
    line.append(f"{span.get('duration_ms', 0.0):>8.2f}ms", style="dim")
    line.append(f"  {span.get('name', '?')}")
    for key, value in span.get("annotations", {}).items():
        line.append(f"  {key}={value}", style="dim")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="instr.error")
    op = Text(f"  {result.op}", style="instr.op")
    console.print(label, op, Text(" — "), Text(msg))

    # Partial sync results still show what did and did not happen.
    if result.data.get("projects"):
        for project in result.data["projects"]:
            _render_project(console, project)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Sync-family renderers ─────────────────────────────────────────────


def _render_project(console: Console, project: dict[str, Any]) -> None:
    header = Text("  ")
    header.append(project["path"], style="bold")
    if "category" in project:
        header.append(f"  [{project['category']} via {project.get('source', '?')}]", style="dim")
    console.print(header)

    if "error" in project:
        err = project["error"]
        console.print(Text(f"    {err['code']}: {err['message']}", style="instr.error"))
        return

    plan = project["plan"]
    statuses = {(r["action"], r["name"]): r for r in project.get("results", [])}

    for action in (*plan["remove"], *plan["create"]):
        if action["action"] == "remove":
            line = Text("    - ", style="instr.remove")
        else:
            line = Text("    + ", style="instr.create")
        line.append(action["name"])
        if action.get("reference"):
            line.append(f"  → {action['reference']}", style="instr.path")
        outcome = statuses.get((action["action"], action["name"]))
        if outcome is not None and outcome["status"] == "failed":
            line.append(f"  failed: {outcome.get('cause', '')}", style="instr.error")
        console.print(line)

    for skip in plan["skip"]:
        line = Text("    ! ", style="instr.skip")
        line.append(skip["name"])
        line.append(f"  {skip['reason']}", style="instr.skip")
        console.print(line)

    if not plan["create"] and not plan["remove"] and not plan["skip"]:
        console.print(Text("    up to date", style="dim"))


def _render_sync(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for project in result.data.get("projects", []):
        _render_project(console, project)
    if verbose:
        _render_meta(console, result)


# ── Library / status renderers ────────────────────────────────────────


def _render_library(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "root", d.get("root", ""))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Group", style="instr.op", no_wrap=True)
    table.add_column("File")
    for name in d.get("core", []):
        table.add_row("core", Text(name))
    for domain, files in d.get("domains", {}).items():
        for name in files:
            table.add_row(Text(f"domains/{domain}"), Text(name))
    for name in d.get("tools", []):
        table.add_row("tools", Text(name))
    console.print(table)

    categories = d.get("categories", {})
    if categories:
        cats = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        cats.add_column("Category", style="bold", no_wrap=True)
        cats.add_column("Core")
        cats.add_column("Domains")
        cats.add_column("Tools")
        for name, body in categories.items():
            cats.add_row(
                Text(name),
                Text(", ".join(body["core"])),
                Text(", ".join(body["domains"])),
                Text(", ".join(body["tools"])),
            )
        console.print(cats)

    for rule in d.get("routing", []):
        console.print(Text(f"  route {rule['pattern']} → {rule['category']}"))
    if verbose:
        _render_meta(console, result)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "path", d.get("path", ""))
    if "category" in d:
        _field(console, "category", f"{d['category']} ({d.get('source', '?')})")

    entries = d.get("entries", [])
    if not entries:
        console.print(Text("  no instructions linked", style="dim"))
    else:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Name", no_wrap=True)
        table.add_column("Kind")
        table.add_column("Target", style="instr.path")
        for entry in entries:
            table.add_row(
                Text(entry["name"]),
                Text(entry["kind"], style=style_for_kind(entry["kind"])),
                Text(entry.get("reference") or entry.get("target", "")),
            )
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "root", d.get("root", ""))
    for path in d.get("created", []):
        console.print(Text(f"    + {path}", style="instr.create"))
    state = "written" if d.get("config_written") else "kept"
    _field(console, "config", f"{d.get('config', '')} ({state})")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "sync": _render_sync,
    "check": _render_sync,
    "add": _render_sync,
    "remove": _render_sync,
    "pick": _render_sync,
    "list": _render_library,
    "status": _render_status,
    "init": _render_init,
}
