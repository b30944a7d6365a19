"""Sync planning — pure set difference between wanted and present links.

The planner never touches the filesystem.  It receives the wanted
references (from a category or a manual pick) and the classified entries
of a project's instructions directory, and returns a :class:`SyncPlan`.

INVARIANT: only ``tracked-symlink`` entries are ever proposed for removal
(plus library-pointing ``broken-symlink`` entries when ``prune_broken`` is
requested).  Regular files and foreign symlinks are never removed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from instr.domain.links import LinkEntry
from instr.domain.references import LibraryReference
from instr.domain.types import ActionStatus, LinkKind, SkipReason, skip_reason_for


@dataclass(frozen=True)
class Create:
    """Link ``reference.slot`` to the library file."""

    reference: LibraryReference

    @property
    def name(self) -> str:
        return self.reference.slot

    def to_dict(self) -> dict[str, Any]:
        return {"action": "create", "name": self.name, "reference": self.reference.rel_path}


@dataclass(frozen=True)
class Remove:
    """Unlink an existing symlink."""

    entry: LinkEntry

    @property
    def name(self) -> str:
        return self.entry.name

    def to_dict(self) -> dict[str, Any]:
        data = {"action": "remove", "name": self.name, "kind": str(self.entry.kind)}
        if self.entry.reference is not None:
            data["reference"] = self.entry.reference.rel_path
        return data


Action = Create | Remove


@dataclass(frozen=True)
class Skip:
    """A slot left untouched, with the reason it was not synced."""

    name: str
    reason: SkipReason
    reference: LibraryReference | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"name": self.name, "reason": str(self.reason)}
        if self.reference is not None:
            data["reference"] = self.reference.rel_path
        return data


@dataclass(frozen=True)
class SyncPlan:
    """Ordered creations and removals plus skipped slots.

    Both action lists are sorted by filename.  Removals are applied before
    creations so a slot can be handed from one library file to another.
    """

    creates: tuple[Create, ...] = ()
    removes: tuple[Remove, ...] = ()
    skips: tuple[Skip, ...] = ()

    @property
    def actions(self) -> tuple[Action, ...]:
        return (*self.removes, *self.creates)

    @property
    def is_empty(self) -> bool:
        return not self.creates and not self.removes

    def to_dict(self) -> dict[str, Any]:
        return {
            "create": [a.to_dict() for a in self.creates],
            "remove": [a.to_dict() for a in self.removes],
            "skip": [s.to_dict() for s in self.skips],
        }


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing one plan action."""

    action: Action
    status: ActionStatus
    cause: str | None = None

    @property
    def failed(self) -> bool:
        return self.status is ActionStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        data = {**self.action.to_dict(), "status": str(self.status)}
        if self.cause is not None:
            data["cause"] = self.cause
        return data


def assign_slots(
    wanted: Iterable[LibraryReference],
) -> tuple[dict[str, LibraryReference], list[Skip]]:
    """Assign each wanted reference to its slot, first come first served.

    Later references that share a filename with an earlier one are
    returned as ``duplicate-slot`` skips.
    """
    slots: dict[str, LibraryReference] = {}
    duplicates: list[Skip] = []
    for ref in wanted:
        if ref.slot in slots:
            if slots[ref.slot] != ref:
                duplicates.append(Skip(ref.slot, SkipReason.DUPLICATE_SLOT, ref))
            continue
        slots[ref.slot] = ref
    return slots, duplicates


def plan_sync(
    wanted: Iterable[LibraryReference],
    entries: Mapping[str, LinkEntry],
    *,
    prune: bool = True,
    prune_broken: bool = False,
) -> SyncPlan:
    """Compute the plan that converges *entries* to *wanted*.

    Args:
        wanted: References the project should have linked, in declaration order.
        entries: Current directory entries keyed by name.
        prune: Remove tracked links that are not wanted.  ``add`` passes
            False so links outside the requested slots are left alone.
        prune_broken: Also remove broken symlinks whose target lies in the
            library store.
    """
    slots, skips = assign_slots(wanted)

    creates: list[Create] = []
    removes: list[Remove] = []

    for name, ref in slots.items():
        entry = entries.get(name)
        if entry is None:
            creates.append(Create(ref))
            continue
        if entry.points_at(ref):
            continue
        if entry.kind is LinkKind.TRACKED:
            # Slot holds a link to a different library file: hand it over.
            removes.append(Remove(entry))
            creates.append(Create(ref))
        elif entry.kind is LinkKind.BROKEN and prune_broken and entry.in_library:
            removes.append(Remove(entry))
            creates.append(Create(ref))
        else:
            skips.append(Skip(name, skip_reason_for(entry.kind), ref))

    if prune:
        for name, entry in entries.items():
            if name in slots:
                continue
            if entry.kind is LinkKind.TRACKED:
                removes.append(Remove(entry))
            elif entry.kind is LinkKind.BROKEN and prune_broken and entry.in_library:
                removes.append(Remove(entry))

    return SyncPlan(
        creates=tuple(sorted(creates, key=lambda a: a.name)),
        removes=tuple(sorted(removes, key=lambda a: a.name)),
        skips=tuple(sorted(skips, key=lambda s: (s.name, str(s.reason)))),
    )


def plan_unlink(names: Iterable[str], entries: Mapping[str, LinkEntry]) -> SyncPlan:
    """Plan removal of the named tracked links.

    Names that are not tracked symlinks are skipped with a reason; nothing
    other than a tracked symlink is ever proposed for removal.
    """
    removes: list[Remove] = []
    skips: list[Skip] = []
    for name in dict.fromkeys(names):
        entry = entries.get(name)
        if entry is None:
            skips.append(Skip(name, SkipReason.NOT_LINKED))
        elif entry.kind is LinkKind.TRACKED:
            removes.append(Remove(entry))
        else:
            skips.append(Skip(name, skip_reason_for(entry.kind)))
    return SyncPlan(
        removes=tuple(sorted(removes, key=lambda a: a.name)),
        skips=tuple(sorted(skips, key=lambda s: s.name)),
    )
