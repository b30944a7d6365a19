"""Library references — immutable pointers to one instruction file.

A reference is identified by its group, an optional domain name, and a
base filename.  The base filename doubles as the *slot* the file occupies
in a project's instructions directory, so two references with the same
filename compete for the same slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Self

from instr.domain.errors import InvalidReference
from instr.domain.types import GROUP_DIRS, INSTRUCTION_SUFFIX, Group

_DIR_GROUPS: dict[str, Group] = {v: k for k, v in GROUP_DIRS.items()}


def ensure_suffix(name: str) -> str:
    """Append ``.md`` to *name* unless it already ends with it."""
    return name if name.endswith(INSTRUCTION_SUFFIX) else f"{name}{INSTRUCTION_SUFFIX}"


@dataclass(frozen=True, order=True)
class LibraryReference:
    """One instruction file inside the library store."""

    group: Group
    filename: str
    domain: str | None = None

    def __post_init__(self) -> None:
        if (self.group == Group.DOMAIN) != (self.domain is not None):
            msg = f"domain name is required for (and only for) domain references: {self!r}"
            raise ValueError(msg)

    @property
    def slot(self) -> str:
        """Name of the symlink this reference occupies in a project."""
        return self.filename

    @property
    def stem(self) -> str:
        return PurePosixPath(self.filename).stem

    @property
    def rel_path(self) -> str:
        """Library-relative POSIX path, e.g. ``domains/web/react-patterns.md``."""
        parts = [GROUP_DIRS[self.group]]
        if self.domain is not None:
            parts.append(self.domain)
        parts.append(self.filename)
        return "/".join(parts)

    @classmethod
    def core(cls, stem: str) -> Self:
        return cls(Group.CORE, ensure_suffix(stem))

    @classmethod
    def tool(cls, name: str) -> Self:
        return cls(Group.TOOL, ensure_suffix(name))

    @classmethod
    def in_domain(cls, domain: str, stem: str) -> Self:
        return cls(Group.DOMAIN, ensure_suffix(stem), domain)

    @classmethod
    def from_rel_path(cls, rel_path: str) -> Self | None:
        """Inverse of :attr:`rel_path`.  Returns None for paths outside the layout."""
        parts = PurePosixPath(rel_path).parts
        if not parts or parts[0] not in _DIR_GROUPS:
            return None
        group = _DIR_GROUPS[parts[0]]
        if group is Group.DOMAIN:
            if len(parts) != 3:
                return None
            return cls(group, parts[2], parts[1])
        if len(parts) != 2:
            return None
        return cls(group, parts[1])

    def __str__(self) -> str:
        return self.rel_path


@dataclass(frozen=True)
class ReferenceQuery:
    """A parsed user reference: a single file, or every file of a domain.

    ``stem`` is None only for whole-domain queries (``domains/web``).
    """

    group: Group
    stem: str | None
    domain: str | None = None

    @property
    def whole_domain(self) -> bool:
        return self.stem is None


def parse_reference(text: str) -> ReferenceQuery:
    """Parse ``core/<stem>``, ``tools/<name>``, ``domains/<d>[/<stem>]``.

    A trailing ``.md`` is accepted and ignored.

    Examples:
        >>> parse_reference("tools/docker.md")
        ReferenceQuery(group=<Group.TOOL: 'tool'>, stem='docker', domain=None)
        >>> parse_reference("domains/web").whole_domain
        True
    """
    parts = [p for p in text.strip().strip("/").split("/") if p]
    if not parts or parts[0] not in _DIR_GROUPS:
        raise InvalidReference(
            f"Invalid reference {text!r}: expected core/<name>, domains/<domain>[/<name>], "
            "or tools/<name>",
            reference=text,
        )
    if any(p in (".", "..") for p in parts):
        raise InvalidReference(f"Invalid reference {text!r}: path traversal", reference=text)

    group = _DIR_GROUPS[parts[0]]
    rest = parts[1:]
    if group is Group.DOMAIN:
        if len(rest) == 1:
            return ReferenceQuery(group, None, rest[0])
        if len(rest) == 2:
            return ReferenceQuery(group, PurePosixPath(ensure_suffix(rest[1])).stem, rest[0])
    elif len(rest) == 1:
        return ReferenceQuery(group, PurePosixPath(ensure_suffix(rest[0])).stem)
    raise InvalidReference(f"Invalid reference {text!r}: wrong number of parts", reference=text)
