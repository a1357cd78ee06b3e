"""formcheck CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """formcheck — declarative form field validation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from formcheck.cli.form_cmd import check, schema  # noqa: E402
from formcheck.cli.messages_cmd import messages  # noqa: E402

cli.add_command(check)
cli.add_command(schema)
cli.add_command(messages)
