"""Library store — the central tree of canonical instruction files.

Layout::

    <root>/core/<stem>.md
    <root>/domains/<domain>/<stem>.md
    <root>/tools/<tool>.md
    <root>/config.yaml

All listings are sorted so that every derived wanted set, and therefore
every plan, is deterministic.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from instr.config.models import Category
from instr.domain.errors import LibraryFileMissing
from instr.domain.references import LibraryReference, ReferenceQuery
from instr.domain.types import GROUP_DIRS, INSTRUCTION_SUFFIX, Group

logger = logging.getLogger(__name__)


def _md_files(directory: Path) -> list[str]:
    """Sorted ``*.md`` regular files in *directory*, skipping dotfiles."""
    if not directory.is_dir():
        return []
    return sorted(
        p.name
        for p in directory.iterdir()
        if p.suffix == INSTRUCTION_SUFFIX and not p.name.startswith(".") and p.is_file()
    )


class LibraryStore:
    """Read access to the library store rooted at *root*.

    *root* is kept as given (absolute, unresolved) so created symlinks
    point at the path the user configured.  Containment checks accept
    both that path and its canonical form.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.absolute()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.root.is_dir()

    def group_dir(self, group: Group) -> Path:
        return self.root / GROUP_DIRS[group]

    def path_for(self, ref: LibraryReference) -> Path:
        """Absolute path of *ref* inside the store (may not exist)."""
        return self.root.joinpath(*ref.rel_path.split("/"))

    def has(self, ref: LibraryReference) -> bool:
        return self.path_for(ref).is_file()

    def require(self, ref: LibraryReference) -> Path:
        """Return the path of *ref*, or raise :class:`LibraryFileMissing`."""
        path = self.path_for(ref)
        if not path.is_file():
            raise LibraryFileMissing(ref.rel_path)
        return path

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def core_files(self) -> list[LibraryReference]:
        return [LibraryReference(Group.CORE, n) for n in _md_files(self.group_dir(Group.CORE))]

    def domains(self) -> list[str]:
        base = self.group_dir(Group.DOMAIN)
        if not base.is_dir():
            return []
        return sorted(p.name for p in base.iterdir() if p.is_dir() and not p.name.startswith("."))

    def domain_files(self, domain: str) -> list[LibraryReference]:
        directory = self.group_dir(Group.DOMAIN) / domain
        return [LibraryReference(Group.DOMAIN, n, domain) for n in _md_files(directory)]

    def tools(self) -> list[LibraryReference]:
        return [LibraryReference(Group.TOOL, n) for n in _md_files(self.group_dir(Group.TOOL))]

    def all_references(self) -> list[LibraryReference]:
        """Every instruction file: core, then domains, then tools."""
        refs = self.core_files()
        for domain in self.domains():
            refs.extend(self.domain_files(domain))
        refs.extend(self.tools())
        return refs

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def expand(
        self, category: Category
    ) -> tuple[list[LibraryReference], list[LibraryFileMissing]]:
        """Expand *category* into wanted references, in declaration order.

        Missing core/tool files and missing domain directories are
        returned as errors rather than raised, so one bad entry does not
        hide the rest of the category.
        """
        wanted: list[LibraryReference] = []
        missing: list[LibraryFileMissing] = []

        for stem in category.core:
            ref = LibraryReference.core(stem)
            if self.has(ref):
                wanted.append(ref)
            else:
                missing.append(LibraryFileMissing(ref.rel_path))

        for domain in category.domains:
            directory = self.group_dir(Group.DOMAIN) / domain
            if not directory.is_dir():
                missing.append(LibraryFileMissing(f"{GROUP_DIRS[Group.DOMAIN]}/{domain}/"))
                continue
            files = self.domain_files(domain)
            if not files:
                logger.debug("Domain %s has no instruction files", domain)
            wanted.extend(files)

        for name in category.tools:
            ref = LibraryReference.tool(name)
            if self.has(ref):
                wanted.append(ref)
            else:
                missing.append(LibraryFileMissing(ref.rel_path))

        return wanted, missing

    def resolve_query(self, query: ReferenceQuery) -> list[LibraryReference]:
        """Resolve a parsed user reference to existing library files."""
        if query.whole_domain:
            assert query.domain is not None
            if not (self.group_dir(Group.DOMAIN) / query.domain).is_dir():
                raise LibraryFileMissing(f"{GROUP_DIRS[Group.DOMAIN]}/{query.domain}/")
            return self.domain_files(query.domain)

        assert query.stem is not None
        if query.group is Group.DOMAIN:
            assert query.domain is not None
            ref = LibraryReference.in_domain(query.domain, query.stem)
        elif query.group is Group.CORE:
            ref = LibraryReference.core(query.stem)
        else:
            ref = LibraryReference.tool(query.stem)
        self.require(ref)
        return [ref]

    # ------------------------------------------------------------------
    # Reverse lookup
    # ------------------------------------------------------------------

    def _roots(self) -> tuple[Path, ...]:
        canonical = Path(os.path.realpath(self.root))
        return (self.root,) if canonical == self.root else (self.root, canonical)

    def relative(self, path: Path) -> str | None:
        """POSIX path of *path* relative to the store, or None if outside it.

        *path* is normalized lexically (``..`` collapsed), then tried again
        with its parent directory canonicalized.  The final component is
        never resolved, so a link to a link is judged by the first hop.
        """
        normalized = Path(os.path.normpath(path))
        candidates = [normalized]
        canonical = Path(os.path.realpath(normalized.parent)) / normalized.name
        if canonical != normalized:
            candidates.append(canonical)
        for candidate in candidates:
            for root in self._roots():
                if candidate.is_relative_to(root):
                    return candidate.relative_to(root).as_posix()
        return None

    def contains(self, path: Path) -> bool:
        return self.relative(path) is not None

    def reference_for(self, path: Path) -> LibraryReference | None:
        """The reference a path inside the store corresponds to, if any."""
        rel = self.relative(path)
        if rel is None:
            return None
        return LibraryReference.from_rel_path(rel)
