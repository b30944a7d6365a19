"""Unified settings — CLI flags, env vars, and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``INSTR_*`` prefix; ``AI_INSTRUCTIONS_DIR`` also sets
     the library root, for compatibility with the shell installer
  3. Code defaults

The object is frozen and passed explicitly to every service.  Nothing in
the package reads the current directory or home directory on its own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from instr.config.discovery import default_config_path


def _default_library_root() -> Path:
    return Path.home() / ".ai-instructions"


class InstrSettings(BaseSettings):
    """Settings for one ``instr`` invocation.

    Attributes:
        library_root: Library store directory.
        config_path: Explicit config document, or None for
            ``<library_root>/config.yaml``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "INSTR_",
        "populate_by_name": True,
    }

    library_root: Path = Field(
        default_factory=_default_library_root,
        validation_alias=AliasChoices("INSTR_LIBRARY", "AI_INSTRUCTIONS_DIR"),
    )
    config_path: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("INSTR_CONFIG"),
    )

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    @field_validator("library_root", "config_path", mode="after")
    @classmethod
    def _expand(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser().absolute()

    @property
    def config_file(self) -> Path:
        """The config document this invocation reads."""
        return self.config_path or default_config_path(self.library_root)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI flags over environment; no dotenv or secrets files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(
        cls,
        *,
        library_root: str | Path | None = None,
        config_path: str | Path | None = None,
        **cli_flags: Any,
    ) -> InstrSettings:
        """Construct settings from a CLI invocation.

        Options left as None fall through to the environment and defaults.
        """
        overrides: dict[str, Any] = dict(cli_flags)
        if library_root is not None:
            overrides["library_root"] = Path(library_root)
        if config_path is not None:
            overrides["config_path"] = Path(config_path)
        return cls(**overrides)
