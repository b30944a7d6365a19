"""Root CLI group for instr with global flags and command registration."""

from __future__ import annotations

import click

from instr import __version__
from instr.commands import register_commands
from instr.commands._base import InstrGroup
from instr.commands._context import AppContext
from instr.config.settings import InstrSettings


@click.group(
    cls=InstrGroup,
    invoke_without_command=True,
    examples="""\
  instr init
  instr sync ~/work/shop-frontend
  instr --json check --strict
  instr -L ~/dotfiles/instructions list""",
)
@click.version_option(version=__version__, prog_name="instr")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-L",
    "--library",
    "library_root",
    default=None,
    help="Library directory (default: ~/.ai-instructions).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    library_root: str | None,
) -> None:
    """instr — keep project instruction links in sync with one library."""
    settings = InstrSettings.from_cli(
        library_root=library_root,
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
