# ABOUTME: The `quotebook completions` command that prints a shell completion script.
# ABOUTME: Uses Click's built-in completion support for bash, zsh and fish.

import click
from click.shell_completion import get_completion_class

PROG_NAME = "quotebook"
COMPLETE_VAR = "_QUOTEBOOK_COMPLETE"


@click.command("completions")
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
@click.pass_context
def completions(ctx: click.Context, shell: str) -> None:
    """Print the completion script for SHELL.

    For example: quotebook completions bash >> ~/.bashrc
    """
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise click.UsageError(f"Unsupported shell: {shell}")
    root = ctx.find_root().command
    click.echo(completion_class(root, {}, PROG_NAME, COMPLETE_VAR).source())
