# ABOUTME: CLI package for Quotebook, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from quotebook.cli.commands import (
    add_cmd,
    author_cmd,
    book_cmd,
    completions_cmd,
    config_cmd,
    edit_cmd,
    export_cmd,
    import_cmd,
    ls_cmd,
    random_cmd,
    rm_cmd,
    search_cmd,
    show_cmd,
    stats_cmd,
    tag_cmd,
)


@click.group()
@click.version_option(package_name="quotebook")
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """Quotebook - keep and find quotes from the books you read."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(add_cmd.add)
cli.add_command(edit_cmd.edit)
cli.add_command(rm_cmd.rm)
cli.add_command(show_cmd.show)
cli.add_command(ls_cmd.ls)
cli.add_command(search_cmd.search)
cli.add_command(random_cmd.random_quote)
cli.add_command(book_cmd.book)
cli.add_command(author_cmd.author)
cli.add_command(tag_cmd.tag)
cli.add_command(import_cmd.import_quotes)
cli.add_command(export_cmd.export_quotes)
cli.add_command(stats_cmd.stats)
cli.add_command(completions_cmd.completions)
cli.add_command(config_cmd.config)
