"""Tests for operation-specific Rich renderers."""

from instr.output.renderers import render_quiet, render_result
from instr.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _project(**overrides: object) -> dict:
    project = {
        "path": "/work/shop",
        "ok": True,
        "in_sync": False,
        "dry_run": False,
        "category": "web",
        "source": "routing",
        "plan": {
            "create": [{"action": "create", "name": "docker.md", "reference": "tools/docker.md"}],
            "remove": [{"action": "remove", "name": "old.md", "kind": "tracked-symlink"}],
            "skip": [{"name": "notes.md", "reason": "regular-file-present"}],
        },
        "results": [],
    }
    project.update(overrides)
    return project


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("sync", "LIBRARY_NOT_FOUND", "Library store not found"))
        assert "ERROR" in output
        assert "sync" in output
        assert "Library store not found" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("add", "INVALID_REFERENCE", "Bad", reference="docker")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "reference: docker" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="sync"))

    def test_partial_projects_rendered(self) -> None:
        failed = {
            "path": "/work/broken",
            "ok": False,
            "error": {"code": "UNKNOWN_CATEGORY", "message": "Unknown category 'x'", "detail": {}},
        }
        result = ServiceResult(
            ok=False,
            op="sync",
            data={"projects": [failed, _project()]},
            error=ServiceError(code="PROJECT_FAILED", message="1 of 2 project(s) failed"),
        )
        output = render_result(result)
        assert "/work/broken" in output
        assert "UNKNOWN_CATEGORY" in output
        assert "+ docker.md" in output


# ── Sync-family renderer ─────────────────────────────────────────────


class TestSyncRenderer:
    def test_plan_lines(self) -> None:
        output = render_result(_ok("sync", projects=[_project()]))
        assert "OK" in output
        assert "/work/shop" in output
        assert "web via routing" in output
        assert "+ docker.md" in output
        assert "tools/docker.md" in output
        assert "- old.md" in output
        assert "! notes.md" in output
        assert "regular-file-present" in output

    def test_up_to_date(self) -> None:
        plan = {"create": [], "remove": [], "skip": []}
        output = render_result(_ok("check", projects=[_project(plan=plan, in_sync=True)]))
        assert "up to date" in output

    def test_dry_run_marker(self) -> None:
        output = render_result(_ok("sync", projects=[_project()], dry_run=True))
        assert "dry run" in output

    def test_failed_action_cause(self) -> None:
        results = [
            {
                "action": "create",
                "name": "docker.md",
                "status": "failed",
                "cause": "Permission denied: docker.md",
            }
        ]
        output = render_result(_ok("sync", projects=[_project(results=results)]))
        assert "failed: Permission denied" in output

    def test_brackets_are_not_markup(self) -> None:
        plan = {
            "create": [{"action": "create", "name": "[bold]x.md", "reference": "tools/[bold]x.md"}],
            "remove": [],
            "skip": [],
        }
        output = render_result(_ok("add", projects=[_project(plan=plan)]))
        assert "[bold]x.md" in output


# ── Library / status / init ──────────────────────────────────────────


class TestLibraryRenderer:
    def test_tables(self) -> None:
        result = _ok(
            "list",
            root="/lib",
            core=["coding-standards.md"],
            domains={"web": ["react-patterns.md"]},
            tools=["docker.md"],
            categories={"web": {"core": ["coding-standards"], "domains": ["web"], "tools": []}},
            routing=[{"pattern": "*/frontend/*", "category": "web"}],
        )
        output = render_result(result)
        assert "domains/web" in output
        assert "react-patterns.md" in output
        assert "coding-standards" in output
        assert "*/frontend/*" in output


class TestStatusRenderer:
    def test_entries(self) -> None:
        entries = [
            {"name": "docker.md", "kind": "tracked-symlink", "reference": "tools/docker.md"},
            {"name": "notes.md", "kind": "regular-file"},
        ]
        output = render_result(
            _ok("status", path="/w/p", entries=entries, category="web", source="marker")
        )
        assert "tracked-symlink" in output
        assert "regular-file" in output
        assert "web (marker)" in output

    def test_empty(self) -> None:
        assert "no instructions linked" in render_result(_ok("status", path="/w", entries=[]))


class TestInitRenderer:
    def test_created_and_kept(self) -> None:
        result = _ok(
            "init",
            root="/lib",
            created=["/lib/core"],
            config="/lib/config.yaml",
            config_written=False,
        )
        output = render_result(result)
        assert "+ /lib/core" in output
        assert "(kept)" in output


class TestGenericAndQuiet:
    def test_generic_fallback(self) -> None:
        output = render_result(_ok("pick_candidates", path="/w"))
        assert "path: /w" in output

    def test_verbose_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="mystery",
            meta={"telemetry": {"name": "Svc.op", "duration_ms": 1.5, "children": []}},
        )
        output = render_result(result, verbose=True)
        assert "Svc.op" in output
        assert "1.50ms" in output

    def test_quiet_ok(self) -> None:
        assert render_quiet(_ok("sync")) == "OK: sync"

    def test_quiet_error(self) -> None:
        assert render_quiet(_err("sync", "X", "boom")).startswith("ERROR: sync")
