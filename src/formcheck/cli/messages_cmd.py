"""Message catalog CLI command."""

from pathlib import Path

import click

from formcheck.validation import ConfigurationError, MessageCatalog


@click.command()
@click.option(
    "--catalog",
    "catalog_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML catalog to merge over the built-in messages.",
)
def messages(catalog_path: Path | None):
    """List the message catalog keys and templates."""
    try:
        catalog = (
            MessageCatalog.from_yaml(catalog_path) if catalog_path else MessageCatalog.default()
        )
    except ConfigurationError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        raise SystemExit(1)

    for key in catalog.keys():
        click.echo(f"{key}: {catalog.template(key)}")
