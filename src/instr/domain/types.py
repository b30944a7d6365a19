"""Classification enums shared across the sync pipeline."""

from __future__ import annotations

from enum import StrEnum


class Group(StrEnum):
    """Top-level groups of the library store."""

    CORE = "core"
    DOMAIN = "domain"
    TOOL = "tool"


class LinkKind(StrEnum):
    """Classification of one entry in a project's instructions directory."""

    TRACKED = "tracked-symlink"
    FOREIGN = "foreign-symlink"
    REGULAR = "regular-file"
    BROKEN = "broken-symlink"


class SkipReason(StrEnum):
    """Why a wanted slot or requested name was left untouched."""

    REGULAR_FILE = "regular-file-present"
    FOREIGN_SYMLINK = "foreign-symlink-present"
    BROKEN_SYMLINK = "broken-symlink-present"
    DUPLICATE_SLOT = "duplicate-slot"
    NOT_LINKED = "not-linked"


class ActionStatus(StrEnum):
    """Outcome of a single executed plan action."""

    APPLIED = "applied"
    DRY_RUN = "skipped-dry-run"
    FAILED = "failed"


# Directory (relative to a project root) that receives the symlinks.
INSTRUCTIONS_DIR = ".github/instructions"

# Optional file at a project root naming its category explicitly.
CATEGORY_MARKER = ".instr-category"

# Library store subdirectory for each group.
GROUP_DIRS: dict[Group, str] = {
    Group.CORE: "core",
    Group.DOMAIN: "domains",
    Group.TOOL: "tools",
}

INSTRUCTION_SUFFIX = ".md"


def skip_reason_for(kind: LinkKind) -> SkipReason:
    """Map an occupying entry kind to the skip reason reported for it."""
    return {
        LinkKind.REGULAR: SkipReason.REGULAR_FILE,
        LinkKind.FOREIGN: SkipReason.FOREIGN_SYMLINK,
        LinkKind.BROKEN: SkipReason.BROKEN_SYMLINK,
    }[kind]
