"""Jinja2 template loading for files written by ``instr init``."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(*, library_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with library overrides before packaged defaults.

    Overrides are read from ``<library>/.instr/templates/`` so a team can
    ship its own starter config alongside its library.
    """
    loaders: list[BaseLoader] = []
    if library_root is not None:
        loaders.append(FileSystemLoader(str(library_root / ".instr" / "templates")))
    loaders.append(PackageLoader("instr", "templates"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
