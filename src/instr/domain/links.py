"""Link entries — what currently sits in a project's instructions directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from instr.domain.references import LibraryReference
from instr.domain.types import INSTRUCTIONS_DIR, LinkKind


@dataclass(frozen=True)
class ProjectTarget:
    """A project root and the directory its symlinks live in."""

    root: Path

    @classmethod
    def at(cls, path: Path | str) -> ProjectTarget:
        return cls(Path(path).expanduser().absolute())

    @property
    def instructions_dir(self) -> Path:
        return self.root.joinpath(*INSTRUCTIONS_DIR.split("/"))


@dataclass(frozen=True)
class LinkEntry:
    """One directory entry, classified.

    Attributes:
        name: Entry filename (unique within its directory).
        kind: Classification of the entry.
        target: Immediate symlink target made absolute; None for regular files.
        reference: The library file a tracked (or library-pointing broken)
            symlink refers to, when its target matches the library layout.
        in_library: Whether the symlink target lies under the library root,
            whether or not it exists.
    """

    name: str
    kind: LinkKind
    target: Path | None = None
    reference: LibraryReference | None = None
    in_library: bool = False

    @property
    def is_symlink(self) -> bool:
        return self.kind is not LinkKind.REGULAR

    def points_at(self, ref: LibraryReference) -> bool:
        """True if this is a tracked symlink to exactly *ref*."""
        return self.kind is LinkKind.TRACKED and self.reference == ref

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "kind": str(self.kind)}
        if self.target is not None:
            data["target"] = str(self.target)
        if self.reference is not None:
            data["reference"] = self.reference.rel_path
        return data
