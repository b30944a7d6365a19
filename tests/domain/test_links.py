"""Tests for project targets and link entries."""

from __future__ import annotations

from pathlib import Path

from instr.domain.links import LinkEntry, ProjectTarget
from instr.domain.references import LibraryReference
from instr.domain.types import LinkKind


class TestProjectTarget:
    def test_instructions_dir(self, tmp_path: Path) -> None:
        target = ProjectTarget.at(tmp_path)
        assert target.instructions_dir == tmp_path / ".github" / "instructions"

    def test_relative_path_made_absolute(self) -> None:
        assert ProjectTarget.at(".").root.is_absolute()


class TestLinkEntry:
    def test_points_at_requires_tracked(self) -> None:
        ref = LibraryReference.tool("docker")
        tracked = LinkEntry("docker.md", LinkKind.TRACKED, reference=ref, in_library=True)
        broken = LinkEntry("docker.md", LinkKind.BROKEN, reference=ref, in_library=True)
        assert tracked.points_at(ref)
        assert not broken.points_at(ref)
        assert not tracked.points_at(LibraryReference.tool("npm"))

    def test_is_symlink(self) -> None:
        assert not LinkEntry("a.md", LinkKind.REGULAR).is_symlink
        assert LinkEntry("a.md", LinkKind.FOREIGN, target=Path("/x")).is_symlink

    def test_to_dict(self) -> None:
        ref = LibraryReference.core("a")
        entry = LinkEntry("a.md", LinkKind.TRACKED, Path("/lib/core/a.md"), ref, True)
        assert entry.to_dict() == {
            "name": "a.md",
            "kind": "tracked-symlink",
            "target": "/lib/core/a.md",
            "reference": "core/a.md",
        }

    def test_regular_to_dict_is_minimal(self) -> None:
        assert LinkEntry("notes.md", LinkKind.REGULAR).to_dict() == {
            "name": "notes.md",
            "kind": "regular-file",
        }
