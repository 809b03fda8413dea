"""
Commandes CLI de gestion de la bibliotheque : ajout de serie, saisons ignorees.
"""

import asyncio
from typing import Annotated

import typer

from showsync.adapters.cli.helpers import console, with_container
from showsync.core.entities.media import Season, Series
from showsync.core.events import SeriesAddedEvent


def add_series(
    tvdb_id: Annotated[int, typer.Argument(help="ID TVDB de la serie")],
) -> None:
    """Ajoute une serie a la bibliotheque puis la rafraichit depuis TVDB."""
    exit_code = asyncio.run(_add_series_async(tvdb_id))
    if exit_code:
        raise typer.Exit(code=exit_code)


@with_container()
async def _add_series_async(container, tvdb_id: int) -> int:
    """Implementation async de la commande add."""
    series_repo = container.series_repository()

    existing = series_repo.get_by_tvdb_id(tvdb_id)
    if existing is not None:
        console.print(
            f"[yellow]Serie deja presente :[/yellow] {existing.title} (ID {existing.id})"
        )
        return 0

    series = series_repo.save(Series(tvdb_id=tvdb_id))
    console.print(f"Serie ajoutee (ID {series.id}), rafraichissement TVDB...")

    # Le rafraichissement est declenche par l'abonne a SeriesAddedEvent
    bus = container.event_bus()
    bus.publish(SeriesAddedEvent(series=series))
    await bus.drain()

    # Nouvelle session : le rafraichissement a ecrit via une autre session
    refreshed = container.series_repository().get_by_id(series.id)
    if refreshed is None or refreshed.last_info_sync is None:
        console.print("[red]Le rafraichissement TVDB a echoue[/red] (voir les logs)")
        return 1

    console.print(f"[green]✓[/green] {refreshed.title} ({refreshed.network or 'reseau inconnu'})")
    return 0


def ignore_season(
    series_id: Annotated[str, typer.Argument(help="ID interne de la serie")],
    season_number: Annotated[int, typer.Argument(help="Numero de saison")],
    unignore: Annotated[
        bool,
        typer.Option("--unignore", help="Retirer le drapeau ignore"),
    ] = False,
) -> None:
    """Marque une saison comme ignoree (heritage par les nouveaux episodes)."""
    exit_code = asyncio.run(_ignore_season_async(series_id, season_number, not unignore))
    if exit_code:
        raise typer.Exit(code=exit_code)


@with_container()
async def _ignore_season_async(container, series_id: str, season_number: int, ignored: bool) -> int:
    """Implementation async de la commande ignore-season."""
    series = container.series_repository().get_by_id(series_id)
    if series is None:
        console.print(f"[red]Serie introuvable :[/red] {series_id}")
        return 1

    season = container.season_repository().save(
        Season(series_id=series.id, season_number=season_number, ignored=ignored)
    )
    state = "ignoree" if season.ignored else "suivie"
    console.print(f"{series.title or series.id} - saison {season.season_number} : {state}")
    return 0
