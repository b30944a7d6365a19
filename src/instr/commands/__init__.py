"""Subcommand modules for instr.

Provides register_commands(), using deferred imports so ``instr --help``
stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every subcommand on the root CLI group."""
    # --- Plan-and-apply ---
    from instr.commands.add import add
    from instr.commands.check import check
    from instr.commands.pick import pick
    from instr.commands.remove import remove
    from instr.commands.sync import sync

    cli.add_command(sync)
    cli.add_command(check)
    cli.add_command(add)
    cli.add_command(remove)
    cli.add_command(pick)

    # --- Inspection and setup ---
    from instr.commands.init_cmd import init_cmd
    from instr.commands.list_cmd import list_cmd
    from instr.commands.status import status

    cli.add_command(list_cmd)
    cli.add_command(status)
    cli.add_command(init_cmd)
