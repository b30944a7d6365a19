"""Wanted-set providers — where the list of references to link comes from.

Category resolution and manual selection are two implementations of the
same capability; the sync flow consumes either without special cases.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from instr.services.resolver import resolve_category

if TYPE_CHECKING:
    from instr.config.models import InstrConfig
    from instr.domain.links import ProjectTarget
    from instr.domain.references import LibraryReference
    from instr.infrastructure.library import LibraryStore


@dataclass(frozen=True)
class WantedSet:
    """References a project should have linked, in declaration order.

    Attributes:
        references: Existing library files to link.
        missing: Library paths that were asked for but do not exist.
        category: Category name, when the set came from a category.
        source: How the set was produced (``flag``, ``marker``, ``routing``,
            ``default``, or ``selection``).
    """

    references: tuple[LibraryReference, ...]
    missing: tuple[str, ...] = ()
    category: str | None = None
    source: str = "selection"
    pattern: str | None = None


class WantedSetProvider(Protocol):
    def wanted(self, target: ProjectTarget) -> WantedSet: ...


class CategoryProvider:
    """Wanted set from the project's resolved category."""

    def __init__(
        self,
        config: InstrConfig,
        library: LibraryStore,
        *,
        explicit: str | None = None,
    ) -> None:
        self._config = config
        self._library = library
        self._explicit = explicit

    def wanted(self, target: ProjectTarget) -> WantedSet:
        resolution = resolve_category(target, self._config, explicit=self._explicit)
        refs, missing = self._library.expand(resolution.category)
        return WantedSet(
            references=tuple(refs),
            missing=tuple(m.rel_path for m in missing),
            category=resolution.category.name,
            source=resolution.source,
            pattern=resolution.pattern,
        )


class SelectionProvider:
    """Wanted set given directly: an interactive pick or an ``add`` argument."""

    def __init__(self, references: Sequence[LibraryReference], library: LibraryStore) -> None:
        self._references = tuple(references)
        self._library = library

    def wanted(self, target: ProjectTarget) -> WantedSet:
        present = tuple(r for r in self._references if self._library.has(r))
        missing = tuple(r.rel_path for r in self._references if not self._library.has(r))
        return WantedSet(references=present, missing=missing)
