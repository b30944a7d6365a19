"""LibraryService — inspect and initialize the library store.

``init`` creates the three group directories and a starter
``config.yaml``.  It never writes instruction content and never touches
an existing config unless forced.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from instr.config.models import STARTER_CATEGORIES
from instr.domain.errors import InstrError
from instr.domain.links import ProjectTarget
from instr.domain.types import GROUP_DIRS
from instr.infrastructure.linkstate import read_link_state
from instr.infrastructure.templates import build_template_environment
from instr.services.base import BaseService
from instr.services.resolver import resolve_category
from instr.services.result import ServiceError, ServiceResult
from instr.services.telemetry import traced

log = structlog.get_logger(__name__)

CONFIG_TEMPLATE = "config.yaml.j2"


class LibraryService(BaseService):
    """Read-only views of the library and projects, plus ``init``."""

    @traced
    def list_library(self) -> ServiceResult:
        """Library contents grouped by core/domains/tools, with the category table."""
        try:
            library = self.require_library()
            config = self.config
        except InstrError as exc:
            return ServiceResult(ok=False, op="list", error=ServiceError.from_exception(exc))

        categories = {
            name: {"core": list(c.core), "domains": list(c.domains), "tools": list(c.tools)}
            for name, c in config.categories.items()
        }
        return ServiceResult(
            ok=True,
            op="list",
            data={
                "root": str(library.root),
                "core": [r.filename for r in library.core_files()],
                "domains": {
                    d: [r.filename for r in library.domain_files(d)] for d in library.domains()
                },
                "tools": [r.filename for r in library.tools()],
                "categories": categories,
                "routing": [{"pattern": r.pattern, "category": r.category} for r in config.rules],
            },
        )

    @traced
    def status(self, path: Path, *, category: str | None = None) -> ServiceResult:
        """Classified entries of one project, plus its resolved category.

        Works without a library store: every symlink then reads as foreign
        or broken.  A category that fails to resolve is a warning here.
        """
        target = ProjectTarget.at(path)
        warnings: list[str] = []
        try:
            entries = read_link_state(target, self.library)
        except InstrError as exc:
            return ServiceResult(ok=False, op="status", error=ServiceError.from_exception(exc))

        data: dict[str, Any] = {
            "path": str(target.root),
            "directory": str(target.instructions_dir),
            "entries": [e.to_dict() for e in entries.values()],
            "count": len(entries),
        }
        try:
            resolution = resolve_category(target, self.config, explicit=category)
        except InstrError as exc:
            warnings.append(exc.message)
        else:
            data["category"] = resolution.category.name
            data["source"] = resolution.source
        return ServiceResult(ok=True, op="status", data=data, warnings=warnings)

    @traced
    def init(self, *, force: bool = False) -> ServiceResult:
        """Create the library skeleton and a starter config."""
        root = self.library.root
        created: list[str] = []
        warnings: list[str] = []
        try:
            for group_dir in GROUP_DIRS.values():
                directory = root / group_dir
                if not directory.is_dir():
                    directory.mkdir(parents=True, exist_ok=True)
                    created.append(str(directory))

            config_file = self.settings.config_file
            written = False
            if config_file.exists() and not force:
                warnings.append(f"Config already exists, kept: {config_file}")
            else:
                env = build_template_environment(library_root=root)
                rendered = env.get_template(CONFIG_TEMPLATE).render(
                    library_root=str(root),
                    categories=STARTER_CATEGORIES,
                )
                config_file.parent.mkdir(parents=True, exist_ok=True)
                config_file.write_text(rendered, encoding="utf-8")
                written = True
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op="init",
                error=ServiceError(
                    code="INIT_FAILED",
                    message=f"Cannot initialize library at {root}: {exc}",
                    detail={"path": str(root)},
                ),
            )

        log.info("library.initialized", root=str(root), created=len(created), config=written)
        return ServiceResult(
            ok=True,
            op="init",
            data={
                "root": str(root),
                "created": created,
                "config": str(config_file),
                "config_written": written,
            },
            warnings=warnings,
        )
