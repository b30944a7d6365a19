"""BaseService — foundation for all instr services.

Every service receives the frozen :class:`InstrSettings` at construction
time.  The library store and the config document are derived from it
lazily and loaded fresh for each service instance, never cached across
invocations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from instr.config.discovery import load_config
from instr.domain.errors import LibraryNotFound
from instr.infrastructure.library import LibraryStore

if TYPE_CHECKING:
    from instr.config.models import InstrConfig
    from instr.config.settings import InstrSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SyncService(BaseService):
            def sync(self, paths: list[Path]) -> ServiceResult:
                config = self.config          # may raise ConfigError
                library = self.require_library()
                ...
    """

    def __init__(self, settings: InstrSettings) -> None:
        self._settings = settings
        self._library: LibraryStore | None = None
        self._config: InstrConfig | None = None

    @property
    def settings(self) -> InstrSettings:
        return self._settings

    @property
    def library(self) -> LibraryStore:
        if self._library is None:
            self._library = LibraryStore(self._settings.library_root)
        return self._library

    @property
    def config(self) -> InstrConfig:
        """The category/routing document (raises ConfigError when invalid)."""
        if self._config is None:
            self._config = load_config(self._settings.config_file)
        return self._config

    def require_library(self) -> LibraryStore:
        """The library store, or raise :class:`LibraryNotFound`."""
        if not self.library.exists():
            raise LibraryNotFound(self.library.root)
        return self.library
