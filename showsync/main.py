"""
Point d'entrée CLI de Showsync.

Configure le logging, initialise le container DI et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import add_series, ignore_season, refresh
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="showsync",
    help="Rafraichissement des metadonnees TVDB d'une bibliotheque de series",
)

# Niveaux de log console selon la verbosite (-v, -vv)
_VERBOSITY_LEVELS = {1: "DEBUG", 2: "TRACE"}


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
    """Showsync - Reconciliation des fiches TVDB avec la bibliotheque locale."""
    settings = Settings()
    if quiet:
        log_level = "ERROR"
    else:
        log_level = _VERBOSITY_LEVELS.get(min(verbose, 2), settings.log_level)
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(refresh)
app.command(name="add")(add_series)
app.command(name="ignore-season")(ignore_season)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration Showsync")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API TVDB : {'activée' if config.tvdb_enabled else 'désactivée'}")
    typer.echo(f"Langue TVDB : {config.tvdb_language}")
    typer.echo(f"Niveau de log : {config.log_level}")
    typer.echo(f"Fichier de log : {config.log_file}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Showsync v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
