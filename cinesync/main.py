"""
Point d'entrée CLI de CineSync.

Configure le logging et monte les commandes de decouverte et de watchlist.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    details,
    discover,
    genres,
    search,
    suggest,
    trending,
    watchlist_app,
)
from .config import Settings
from .logging_config import configure_logging, level_from_verbosity

app = typer.Typer(
    name="cinesync",
    help="Decouverte de films et series, gestion de watchlist",
)

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CineSync - Decouverte de films et series."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose

    settings = Settings()
    configure_logging(
        log_level=level_from_verbosity(verbose, quiet, default=settings.log_level),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Commandes de decouverte
app.command()(search)
app.command()(suggest)
app.command()(trending)
app.command()(genres)
app.command()(discover)
app.command()(details)

# Monter watchlist_app comme sous-commande
app.add_typer(watchlist_app, name="watchlist")


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration CineSync")
    typer.echo(f"API catalogue : {config.api_base_url}")
    typer.echo(f"Timeout : {config.request_timeout}s")
    typer.echo(
        f"Debounce : recherche {config.search_debounce_ms} ms, "
        f"suggestions {config.suggestion_debounce_ms} ms"
    )
    typer.echo(f"Longueur minimale de requete : {config.min_query_length}")
    typer.echo(f"Region des plateformes : {config.default_region}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineSync v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
