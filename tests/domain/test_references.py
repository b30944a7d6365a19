"""Tests for library references and reference parsing."""

from __future__ import annotations

import pytest

from instr.domain.errors import InvalidReference
from instr.domain.references import LibraryReference, ensure_suffix, parse_reference
from instr.domain.types import Group


class TestLibraryReference:
    def test_core_slot_and_rel_path(self) -> None:
        ref = LibraryReference.core("coding-standards")
        assert ref.slot == "coding-standards.md"
        assert ref.rel_path == "core/coding-standards.md"
        assert ref.stem == "coding-standards"

    def test_domain_rel_path(self) -> None:
        ref = LibraryReference.in_domain("web", "react-patterns.md")
        assert ref.rel_path == "domains/web/react-patterns.md"
        assert ref.slot == "react-patterns.md"
        assert str(ref) == ref.rel_path

    def test_tool_suffix_added_once(self) -> None:
        assert LibraryReference.tool("docker").filename == "docker.md"
        assert LibraryReference.tool("docker.md").filename == "docker.md"

    def test_domain_requires_name(self) -> None:
        with pytest.raises(ValueError):
            LibraryReference(Group.DOMAIN, "x.md")

    def test_non_domain_rejects_name(self) -> None:
        with pytest.raises(ValueError):
            LibraryReference(Group.CORE, "x.md", "web")

    def test_same_filename_same_slot(self) -> None:
        a = LibraryReference.in_domain("web", "testing.md")
        b = LibraryReference.in_domain("backend", "testing.md")
        assert a != b
        assert a.slot == b.slot

    @pytest.mark.parametrize(
        "rel_path",
        ["core/a.md", "domains/web/b.md", "tools/c.md"],
    )
    def test_from_rel_path_inverts_rel_path(self, rel_path: str) -> None:
        ref = LibraryReference.from_rel_path(rel_path)
        assert ref is not None
        assert ref.rel_path == rel_path

    @pytest.mark.parametrize(
        "rel_path",
        ["config.yaml", "domains/web.md", "core/nested/a.md", "misc/a.md", ""],
    )
    def test_from_rel_path_outside_layout(self, rel_path: str) -> None:
        assert LibraryReference.from_rel_path(rel_path) is None

    def test_ordering_is_total(self) -> None:
        refs = [LibraryReference.tool("b"), LibraryReference.core("a")]
        assert sorted(refs)[0].group is Group.CORE


class TestEnsureSuffix:
    def test_adds(self) -> None:
        assert ensure_suffix("x") == "x.md"

    def test_keeps(self) -> None:
        assert ensure_suffix("x.md") == "x.md"


class TestParseReference:
    def test_core(self) -> None:
        query = parse_reference("core/coding-standards")
        assert query.group is Group.CORE
        assert query.stem == "coding-standards"
        assert not query.whole_domain

    def test_tool_with_suffix(self) -> None:
        query = parse_reference("tools/docker.md")
        assert query.group is Group.TOOL
        assert query.stem == "docker"

    def test_domain_file(self) -> None:
        query = parse_reference("domains/web/react-patterns")
        assert query.domain == "web"
        assert query.stem == "react-patterns"

    def test_whole_domain(self) -> None:
        query = parse_reference("domains/backend/")
        assert query.whole_domain
        assert query.domain == "backend"

    @pytest.mark.parametrize(
        "text",
        ["", "docker", "plugins/x", "core", "core/a/b", "domains", "domains/a/b/c", "core/.."],
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidReference) as exc_info:
            parse_reference(text)
        assert exc_info.value.code == "INVALID_REFERENCE"
