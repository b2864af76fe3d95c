"""Typer CLI root application."""

import typer

from shelter_nav.core.config import get_settings
from shelter_nav.core.logging import setup_logging

app = typer.Typer(name="shelter-nav", help="Nearest emergency shelter navigation CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_subcommands() -> None:
    """Register all CLI commands."""
    from shelter_nav.cli.navigate_cmd import nearest, region, simulate

    app.command("region")(region)
    app.command("nearest")(nearest)
    app.command("simulate")(simulate)


_register_subcommands()


