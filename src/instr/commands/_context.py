"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Holds the frozen settings, builds services on
demand, and centralizes result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instr.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from instr.config.settings import InstrSettings
    from instr.services.library import LibraryService
    from instr.services.result import ServiceResult
    from instr.services.sync import SyncService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: InstrSettings) -> None:
        self.settings = settings

        from instr.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from instr.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact

    def sync_service(self) -> SyncService:
        from instr.services.sync import SyncService

        return SyncService(self.settings)

    def library_service(self) -> LibraryService:
        from instr.services.library import LibraryService

        return LibraryService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            raise SystemExit(1)
