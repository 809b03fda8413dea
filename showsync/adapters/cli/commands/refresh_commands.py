"""
Commande CLI de rafraichissement des metadonnees TVDB.
"""

import asyncio
from collections import Counter
from typing import Annotated, Optional

import httpx
import typer
from loguru import logger
from rich.table import Table

from showsync.adapters.cli.helpers import console, with_container
from showsync.core.events import EpisodeInfoAddedEvent, EpisodeInfoUpdatedEvent
from showsync.core.ports.api_clients import SeriesInfoNotFoundError
from showsync.services.refresh_controller import RefreshSeriesCommand
from showsync.services.series_refresh import MissingProviderIdError, SeriesNotFoundError


class EpisodeChangeReport:
    """Compte les episodes ajoutes / mis a jour par serie, a partir des evenements."""

    def __init__(self) -> None:
        self.added: Counter[str] = Counter()
        self.updated: Counter[str] = Counter()

    def on_added(self, event: EpisodeInfoAddedEvent) -> None:
        self.added[event.series.id] += len(event.episodes)

    def on_updated(self, event: EpisodeInfoUpdatedEvent) -> None:
        for episode in event.episodes:
            self.updated[episode.series_id] += 1


def refresh(
    series_id: Annotated[
        Optional[str],
        typer.Option(
            "--series-id", "-s",
            help="ID de la serie a rafraichir (toutes les series si absent)",
        ),
    ] = None,
) -> None:
    """Rafraichit les metadonnees TVDB d'une serie ou de toutes les series."""
    exit_code = asyncio.run(_refresh_async(series_id))
    if exit_code:
        raise typer.Exit(code=exit_code)


@with_container()
async def _refresh_async(container, series_id: Optional[str]) -> int:
    """Implementation async de la commande refresh."""
    config = container.config()
    if not config.tvdb_enabled:
        console.print("[red]Cle API TVDB non configuree[/red] (SHOWSYNC_TVDB_API_KEY)")
        return 1

    report = EpisodeChangeReport()
    bus = container.event_bus()
    bus.subscribe(EpisodeInfoAddedEvent, report.on_added)
    bus.subscribe(EpisodeInfoUpdatedEvent, report.on_updated)

    controller = container.refresh_controller()

    if series_id is not None:
        try:
            series = await controller.refresh_one(series_id)
        except (SeriesNotFoundError, MissingProviderIdError, SeriesInfoNotFoundError) as e:
            console.print(f"[red]Rafraichissement impossible :[/red] {e}")
            return 1
        except httpx.HTTPError as e:
            logger.error(f"Erreur TVDB pour la serie {series_id} : {e}")
            console.print(f"[red]Erreur TVDB :[/red] {e}")
            return 1

        console.print(
            f"[green]✓[/green] {series.title} : "
            f"{report.added[series.id]} ajoute(s), {report.updated[series.id]} mis a jour"
        )
        return 0

    with console.status("[cyan]Rafraichissement des series..."):
        summary = await controller.execute(RefreshSeriesCommand())

    if summary.total == 0:
        console.print("[yellow]Aucune serie dans la bibliotheque.[/yellow]")
        return 0

    table = Table(title="Rafraichissement TVDB")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Serie")
    table.add_column("Statut")
    table.add_column("Ajoutes", justify="right", style="green")
    table.add_column("Mis a jour", justify="right", style="cyan")
    for series in summary.refreshed:
        table.add_row(
            series.id,
            series.title,
            series.status.value,
            str(report.added[series.id]),
            str(report.updated[series.id]),
        )
    console.print(table)

    if summary.failed:
        console.print(f"\n[red]{len(summary.failed)} echec(s)[/red]")
        for failed_id, error in summary.failed.items():
            console.print(f"  [red]✗[/red] serie {failed_id} - {error}")
        return 1
    return 0
