"""Typer group with command aliases and typo suggestions."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from todovault.utils.exit_codes import ERROR_INVALID_ARGS
from todovault.utils.ui.console import get_console

COMMAND_ALIASES = {
    "ls": "list",
    "rm": "delete",
    "complete": "done",
    "reopen": "undo",
}


class SuggestingGroup(TyperGroup):
    """Resolves short aliases and suggests the closest command on typos."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in COMMAND_ALIASES:
            command = super().get_command(ctx, COMMAND_ALIASES[cmd_name])
        return command

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            self._suggest(ctx, args[0])
        return super().resolve_command(ctx, args)

    def _suggest(self, ctx, attempted: str) -> None:
        """Print close matches for *attempted* and exit; return if there are none."""
        visible = [
            name for name, cmd in self.commands.items() if not getattr(cmd, "hidden", False)
        ]
        suggestions = get_close_matches(attempted, visible, n=3, cutoff=0.6)
        if not suggestions:
            return

        console = get_console()
        console.print(f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"')
        console.print()
        if len(suggestions) == 1:
            console.print("[yellow]Did you mean this?[/yellow]")
        else:
            console.print("[yellow]Did you mean one of these?[/yellow]")
        for suggestion in suggestions:
            console.print(f"        {suggestion}")
        raise typer.Exit(ERROR_INVALID_ARGS)
