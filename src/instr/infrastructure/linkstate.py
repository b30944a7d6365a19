"""Link state reader — classify what sits in a project's instructions directory.

Reading never creates the directory; an absent directory is simply empty.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from instr.domain.errors import DirectoryUnreadable
from instr.domain.links import LinkEntry, ProjectTarget
from instr.domain.types import LinkKind
from instr.infrastructure.library import LibraryStore

logger = logging.getLogger(__name__)


def classify_entry(path: Path, library: LibraryStore) -> LinkEntry:
    """Classify a single directory entry at *path*.

    Symlinks are judged by their immediate target only: one ``readlink``,
    made absolute against the link's directory, with no further chain
    resolution.
    """
    if not path.is_symlink():
        return LinkEntry(path.name, LinkKind.REGULAR)

    raw = os.readlink(path)
    target = Path(os.path.normpath(path.parent / raw))
    in_library = library.contains(target)
    reference = library.reference_for(target) if in_library else None

    if not target.exists():
        kind = LinkKind.BROKEN
    elif in_library:
        kind = LinkKind.TRACKED
    else:
        kind = LinkKind.FOREIGN
    return LinkEntry(path.name, kind, target=target, reference=reference, in_library=in_library)


def read_link_state(target: ProjectTarget, library: LibraryStore) -> dict[str, LinkEntry]:
    """Return every entry of *target*'s instructions directory, keyed by name.

    Raises:
        DirectoryUnreadable: on permission or other I/O errors (absence is
            not an error).
    """
    directory = target.instructions_dir
    try:
        names = sorted(os.listdir(directory))
    except FileNotFoundError:
        logger.debug("No instructions directory at %s", directory)
        return {}
    except NotADirectoryError as exc:
        raise DirectoryUnreadable(directory, "not a directory") from exc
    except OSError as exc:
        raise DirectoryUnreadable(directory, exc.strerror or str(exc)) from exc

    entries: dict[str, LinkEntry] = {}
    for name in names:
        try:
            entries[name] = classify_entry(directory / name, library)
        except OSError as exc:
            raise DirectoryUnreadable(directory / name, exc.strerror or str(exc)) from exc
    logger.debug("Read %d entries from %s", len(entries), directory)
    return entries
