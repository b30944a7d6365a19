"""Executor — apply a sync plan to the filesystem, best effort.

INVARIANT: one failed action never aborts the rest of the plan.  Every
action yields an :class:`ActionResult`; callers aggregate failures.

INVARIANT: only symlinks are ever deleted.  A ``Remove`` whose entry is
no longer a symlink fails instead of touching whatever replaced it.
"""

from __future__ import annotations

import logging
import os

from instr.domain.errors import LibraryFileMissing
from instr.domain.links import ProjectTarget
from instr.domain.plan import Action, ActionResult, Create, Remove, SyncPlan
from instr.domain.types import ActionStatus
from instr.infrastructure.library import LibraryStore

logger = logging.getLogger(__name__)


def _create(action: Create, target: ProjectTarget, library: LibraryStore) -> None:
    source = library.require(action.reference)
    directory = target.instructions_dir
    directory.mkdir(parents=True, exist_ok=True)
    os.symlink(source, directory / action.name)


def _remove(action: Remove, target: ProjectTarget) -> None:
    link = target.instructions_dir / action.name
    if not link.is_symlink():
        if link.exists():
            raise FileExistsError(f"{action.name} is no longer a symlink")
        raise FileNotFoundError(f"{action.name} is already gone")
    link.unlink()


def _apply_one(action: Action, target: ProjectTarget, library: LibraryStore) -> ActionResult:
    try:
        if isinstance(action, Create):
            _create(action, target, library)
        else:
            _remove(action, target)
    except LibraryFileMissing as exc:
        logger.info("create %s failed: %s", action.name, exc.message)
        return ActionResult(action, ActionStatus.FAILED, exc.message)
    except OSError as exc:
        cause = str(exc) if exc.strerror is None else f"{exc.strerror}: {action.name}"
        logger.info("%s %s failed: %s", type(action).__name__.lower(), action.name, cause)
        return ActionResult(action, ActionStatus.FAILED, cause)
    logger.debug("%s %s", type(action).__name__.lower(), action.name)
    return ActionResult(action, ActionStatus.APPLIED)


def apply_plan(
    plan: SyncPlan,
    target: ProjectTarget,
    library: LibraryStore,
    *,
    dry_run: bool = False,
) -> list[ActionResult]:
    """Apply *plan* to *target*, removals first, then creations.

    With *dry_run* nothing on disk changes and every action reports
    ``skipped-dry-run``.
    """
    if dry_run:
        return [ActionResult(action, ActionStatus.DRY_RUN) for action in plan.actions]
    return [_apply_one(action, target, library) for action in plan.actions]
