"""Exception hierarchy for the sync pipeline.

Each error carries a stable ``code`` that services copy into
:class:`~instr.services.result.ServiceError` so JSON consumers can
branch on it without parsing messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar


class InstrError(Exception):
    """Base class for all expected failures."""

    code: ClassVar[str] = "INSTR_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigError(InstrError):
    """The configuration document could not be read or validated."""

    code = "CONFIG_ERROR"


class UnknownCategory(InstrError):
    """A declared or routed category has no entry in the category table."""

    code = "UNKNOWN_CATEGORY"

    def __init__(self, name: str, *, source: str, known: list[str]) -> None:
        super().__init__(
            f"Unknown category {name!r} (from {source})",
            category=name,
            source=source,
            known=known,
        )
        self.name = name


class DirectoryUnreadable(InstrError):
    """A project's instructions directory exists but cannot be listed."""

    code = "DIRECTORY_UNREADABLE"

    def __init__(self, path: Path, cause: str) -> None:
        super().__init__(f"Cannot read {path}: {cause}", path=str(path), cause=cause)
        self.path = path


class LibraryFileMissing(InstrError):
    """A wanted reference does not exist in the library store."""

    code = "LIBRARY_FILE_MISSING"

    def __init__(self, rel_path: str) -> None:
        super().__init__(f"Library file missing: {rel_path}", path=rel_path)
        self.rel_path = rel_path


class InvalidReference(InstrError):
    """A user-supplied reference string does not name a library location."""

    code = "INVALID_REFERENCE"


class LibraryNotFound(InstrError):
    """The library store directory does not exist."""

    code = "LIBRARY_NOT_FOUND"

    def __init__(self, root: Path) -> None:
        super().__init__(
            f"Library store not found at {root} (run `instr init` to create it)",
            path=str(root),
        )
