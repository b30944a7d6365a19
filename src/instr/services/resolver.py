"""Config resolver — pick the effective category for a project.

Resolution order:
  1. explicit name (``--category``)
  2. ``<project>/.instr-category`` marker file
  3. routing patterns against the absolute project path, first match wins
  4. the ``default`` category

Routing patterns use shell-glob semantics (``*`` also matches ``/``) and
may start with ``~``.
"""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from instr.config.discovery import read_category_marker
from instr.config.models import DEFAULT_CATEGORY
from instr.domain.errors import UnknownCategory

if TYPE_CHECKING:
    from instr.config.models import Category, InstrConfig
    from instr.domain.links import ProjectTarget

SOURCE_FLAG = "flag"
SOURCE_MARKER = "marker"
SOURCE_ROUTING = "routing"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class Resolution:
    """The effective category and how it was chosen."""

    category: Category
    source: str
    pattern: str | None = None


def match_route(config: InstrConfig, path: str) -> tuple[str, str] | None:
    """Return ``(pattern, category)`` of the first rule matching *path*."""
    for rule in config.rules:
        if fnmatch.fnmatchcase(path, os.path.expanduser(rule.pattern)):
            return rule.pattern, rule.category
    return None


def resolve_category(
    target: ProjectTarget,
    config: InstrConfig,
    *,
    explicit: str | None = None,
) -> Resolution:
    """Resolve *target*'s category against *config*.

    Raises:
        UnknownCategory: the chosen name is not in the category table.
        ConfigError: the marker file exists but cannot be read.
    """
    pattern: str | None = None
    if explicit:
        name, source = explicit, SOURCE_FLAG
    elif (marked := read_category_marker(target.root)) is not None:
        name, source = marked, SOURCE_MARKER
    elif (route := match_route(config, str(target.root))) is not None:
        pattern, name = route
        source = SOURCE_ROUTING
    else:
        name, source = DEFAULT_CATEGORY, SOURCE_DEFAULT

    category = config.categories.get(name)
    if category is None:
        raise UnknownCategory(name, source=source, known=sorted(config.categories))
    return Resolution(category, source, pattern)
