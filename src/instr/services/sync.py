"""SyncService — resolve, read, plan, apply.

One project flows through four steps in strict sequence:

1. a :class:`WantedSetProvider` yields the wanted references,
2. :func:`read_link_state` classifies the instructions directory,
3. :func:`plan_sync` (or :func:`plan_unlink`) diffs the two,
4. :func:`apply_plan` executes the plan, best effort.

Fatal errors (unknown category, unreadable directory) abort only the
project they belong to; other projects in the same invocation continue.
Per-action failures never abort sibling actions.  Both make the overall
result fail so the CLI exits non-zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import structlog

from instr.domain.errors import InstrError
from instr.domain.links import ProjectTarget
from instr.domain.plan import ActionResult, SyncPlan, plan_sync, plan_unlink
from instr.domain.references import LibraryReference, ensure_suffix, parse_reference
from instr.domain.types import ActionStatus, LinkKind
from instr.infrastructure.executor import apply_plan
from instr.infrastructure.linkstate import read_link_state
from instr.services.base import BaseService
from instr.services.providers import CategoryProvider, SelectionProvider, WantedSetProvider
from instr.services.result import ServiceError, ServiceResult
from instr.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class SyncService(BaseService):
    """Converge project instruction directories to their wanted sets."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def sync(
        self,
        paths: Sequence[Path],
        *,
        category: str | None = None,
        dry_run: bool = False,
        prune_broken: bool = False,
    ) -> ServiceResult:
        """Plan and apply the category's file set for every project in *paths*."""
        try:
            provider = CategoryProvider(self.config, self.require_library(), explicit=category)
        except InstrError as exc:
            return self._fatal("sync", exc)
        return self._run(
            "sync",
            paths,
            provider,
            dry_run=dry_run,
            prune_broken=prune_broken,
        )

    @traced
    def check(
        self,
        paths: Sequence[Path],
        *,
        category: str | None = None,
        strict: bool = False,
    ) -> ServiceResult:
        """Report what ``sync`` would do, without touching anything.

        With *strict*, a project that is out of sync fails the result.
        """
        try:
            provider = CategoryProvider(self.config, self.require_library(), explicit=category)
        except InstrError as exc:
            return self._fatal("check", exc)
        return self._run("check", paths, provider, apply=False, strict=strict)

    @traced
    def add(self, reference: str, path: Path, *, dry_run: bool = False) -> ServiceResult:
        """Link one library file (or every file of one domain) into a project.

        Links outside the requested slots are left alone.
        """
        try:
            library = self.require_library()
            refs = library.resolve_query(parse_reference(reference))
        except InstrError as exc:
            return self._fatal("add", exc)
        provider = SelectionProvider(refs, library)
        return self._run("add", [path], provider, dry_run=dry_run, prune=False)

    @traced
    def remove(self, names: Iterable[str], path: Path, *, dry_run: bool = False) -> ServiceResult:
        """Unlink named tracked links from a project.

        Names may be given with or without ``.md``.
        """
        try:
            library = self.require_library()
        except InstrError as exc:
            return self._fatal("remove", exc)

        slots = [ensure_suffix(n) for n in names]
        target = ProjectTarget.at(path)
        try:
            entries = read_link_state(target, library)
        except InstrError as exc:
            return self._fatal("remove", exc)
        plan = plan_unlink(slots, entries)
        results = apply_plan(plan, target, library, dry_run=dry_run)
        report = self._report(target, plan, results, dry_run=dry_run)
        return self._summarize("remove", [report], [], dry_run=dry_run)

    @traced
    def apply_selection(
        self,
        references: Sequence[LibraryReference],
        path: Path,
        *,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Converge a project to an explicit selection (interactive pick)."""
        try:
            library = self.require_library()
        except InstrError as exc:
            return self._fatal("pick", exc)
        provider = SelectionProvider(references, library)
        return self._run("pick", [path], provider, dry_run=dry_run)

    def selection_state(self, path: Path) -> ServiceResult:
        """Every library reference plus the ones *path* currently links."""
        try:
            library = self.require_library()
            entries = read_link_state(ProjectTarget.at(path), library)
        except InstrError as exc:
            return self._fatal("pick_candidates", exc)
        linked = sorted(
            e.reference.rel_path
            for e in entries.values()
            if e.kind is LinkKind.TRACKED and e.reference is not None
        )
        return ServiceResult(
            ok=True,
            op="pick_candidates",
            data={
                "path": str(ProjectTarget.at(path).root),
                "references": [r.rel_path for r in library.all_references()],
                "linked": linked,
            },
        )

    # ------------------------------------------------------------------
    # Per-project pipeline
    # ------------------------------------------------------------------

    def _run(
        self,
        op: str,
        paths: Sequence[Path],
        provider: WantedSetProvider,
        *,
        apply: bool = True,
        dry_run: bool = False,
        prune: bool = True,
        prune_broken: bool = False,
        strict: bool = False,
    ) -> ServiceResult:
        reports: list[dict[str, Any]] = []
        warnings: list[str] = []
        for path in paths:
            target = ProjectTarget.at(path)
            with trace_span(f"project:{target.root.name}") as span:
                try:
                    report = self._sync_project(
                        target,
                        provider,
                        warnings,
                        apply=apply,
                        dry_run=dry_run,
                        prune=prune,
                        prune_broken=prune_broken,
                    )
                except InstrError as exc:
                    log.info("project.failed", path=str(target.root), code=exc.code)
                    report = {
                        "path": str(target.root),
                        "ok": False,
                        "error": ServiceError.from_exception(exc).model_dump(),
                    }
                if span is not None:
                    span.annotate("ok", report["ok"])
            reports.append(report)
        return self._summarize(op, reports, warnings, dry_run=dry_run, strict=strict)

    def _sync_project(
        self,
        target: ProjectTarget,
        provider: WantedSetProvider,
        warnings: list[str],
        *,
        apply: bool,
        dry_run: bool,
        prune: bool,
        prune_broken: bool,
    ) -> dict[str, Any]:
        library = self.library
        with trace_span("resolve"):
            wanted = provider.wanted(target)
        for rel_path in wanted.missing:
            warnings.append(f"{target.root}: library file missing: {rel_path}")

        with trace_span("read"):
            entries = read_link_state(target, library)
        with trace_span("plan"):
            plan = plan_sync(
                wanted.references,
                entries,
                prune=prune,
                prune_broken=prune_broken,
            )

        results: list[ActionResult] = []
        if apply:
            with trace_span("apply"):
                results = apply_plan(plan, target, library, dry_run=dry_run)

        report = self._report(target, plan, results, dry_run=dry_run)
        report["wanted"] = [r.rel_path for r in wanted.references]
        report["missing"] = list(wanted.missing)
        if wanted.category is not None:
            report["category"] = wanted.category
        report["source"] = wanted.source
        if wanted.pattern is not None:
            report["pattern"] = wanted.pattern
        log.info(
            "project.synced" if apply else "project.checked",
            path=str(target.root),
            category=wanted.category,
            create=len(plan.creates),
            remove=len(plan.removes),
            skip=len(plan.skips),
        )
        return report

    @staticmethod
    def _report(
        target: ProjectTarget,
        plan: SyncPlan,
        results: list[ActionResult],
        *,
        dry_run: bool,
    ) -> dict[str, Any]:
        failed = [r for r in results if r.failed]
        return {
            "path": str(target.root),
            "ok": not failed,
            "in_sync": plan.is_empty,
            "dry_run": dry_run,
            "plan": plan.to_dict(),
            "results": [r.to_dict() for r in results],
            "applied": sum(1 for r in results if r.status is ActionStatus.APPLIED),
            "failed": len(failed),
        }

    # ------------------------------------------------------------------
    # Result assembly
    # ------------------------------------------------------------------

    @staticmethod
    def _fatal(op: str, exc: InstrError) -> ServiceResult:
        log.info("op.failed", op=op, code=exc.code, message=exc.message)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))

    @staticmethod
    def _summarize(
        op: str,
        reports: list[dict[str, Any]],
        warnings: list[str],
        *,
        dry_run: bool = False,
        strict: bool = False,
    ) -> ServiceResult:
        fatal = [r for r in reports if "error" in r]
        failures = [
            {"path": r["path"], **res}
            for r in reports
            for res in r.get("results", [])
            if res["status"] == "failed"
        ]
        drifted = [r["path"] for r in reports if "error" not in r and not r["in_sync"]]
        data: dict[str, Any] = {
            "projects": reports,
            "count": len(reports),
            "dry_run": dry_run,
            "in_sync": not drifted and not fatal,
        }

        error: ServiceError | None = None
        if fatal:
            first = fatal[0]["error"]
            if len(reports) == 1:
                error = ServiceError(**first)
            else:
                error = ServiceError(
                    code="PROJECT_FAILED",
                    message=f"{len(fatal)} of {len(reports)} project(s) failed",
                    detail={"projects": [{"path": r["path"], **r["error"]} for r in fatal]},
                )
        elif failures:
            error = ServiceError(
                code="ACTION_FAILED",
                message=f"{len(failures)} action(s) failed",
                detail={"failures": failures},
            )
        elif strict and drifted:
            error = ServiceError(
                code="OUT_OF_SYNC",
                message=f"{len(drifted)} project(s) out of sync",
                detail={"projects": drifted},
            )

        return ServiceResult(
            ok=error is None,
            op=op,
            data=data,
            warnings=warnings,
            error=error,
        )
