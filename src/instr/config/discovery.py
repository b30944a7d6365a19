"""Config file discovery and loading.

The category/routing document lives at ``<library>/config.yaml`` unless
an explicit ``--config`` path (or ``INSTR_CONFIG``) overrides it.  A
project may pin its category with a ``.instr-category`` marker file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from instr.config.models import InstrConfig
from instr.domain.errors import ConfigError
from instr.domain.types import CATEGORY_MARKER

CONFIG_FILENAME = "config.yaml"


def default_config_path(library_root: Path) -> Path:
    return library_root / CONFIG_FILENAME


def load_config(path: Path) -> InstrConfig:
    """Load and validate the YAML config at *path*.

    Returns the built-in default (a lone empty ``default`` category) when
    the file does not exist.  Raises :class:`ConfigError` for unreadable,
    malformed, or schema-invalid documents.
    """
    if not path.is_file():
        return InstrConfig()

    try:
        raw = path.read_text(encoding="utf-8")
        data: Any = YAML(typ="safe").load(raw)
    except (OSError, UnicodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}", path=str(path)) from exc
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}", path=str(path)) from exc

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}", path=str(path))

    try:
        return InstrConfig.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid config in {path}: {exc.error_count()} error(s)",
            path=str(path),
            errors=[
                {"loc": ".".join(str(p) for p in e["loc"]), "msg": e["msg"]} for e in exc.errors()
            ],
        ) from exc


def read_category_marker(project: Path) -> str | None:
    """Return the category named in ``<project>/.instr-category``, if any.

    The first non-empty line that is not a ``#`` comment wins.
    """
    marker = project / CATEGORY_MARKER
    if not marker.is_file():
        return None
    try:
        text = marker.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise ConfigError(f"Cannot read {marker}: {exc}", path=str(marker)) from exc
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            return line
    return None
