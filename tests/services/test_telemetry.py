"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from instr.config.settings import InstrSettings
from instr.services.result import ServiceResult
from instr.services.sync import SyncService
from instr.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="project:shop")
        span.annotate("ok", True)
        span.end()
        assert span.to_dict()["annotations"] == {"ok": True}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("plan") as span:
            assert span is None

    def test_no_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("plan") as span:
            assert span is None


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="x")

        assert op().meta is None

    def test_enabled_attaches_tree(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("read"):
                pass
            return ServiceResult(ok=True, op="x")

        meta = op().meta
        assert meta is not None
        tree = meta["telemetry"]
        assert tree["name"].endswith("op")
        assert [c["name"] for c in tree["children"]] == ["read"]

    def test_sync_spans(self, settings: InstrSettings, project: Path) -> None:
        enable_telemetry()
        result = SyncService(settings).sync([project])
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "SyncService.sync"
        project_span = tree["children"][0]
        assert project_span["name"] == f"project:{project.name}"
        assert [c["name"] for c in project_span["children"]] == [
            "resolve",
            "read",
            "plan",
            "apply",
        ]
        assert project_span["annotations"] == {"ok": True}
