"""
Point d'entree du rafraichissement des series.

Trois declencheurs :
- commande de rafraichissement d'une serie (par ID)
- commande de rafraichissement de toutes les series (les moins recemment
  synchronisees d'abord)
- evenement SeriesAddedEvent (nouvelle serie ajoutee)

Les rafraichissements d'une meme serie sont serialises par un verrou
asyncio propre a la serie. Le verrou ne couvre que le processus courant ;
il est libere des que plus aucun rafraichissement de la serie n'est en cours.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from loguru import logger

from showsync.core.entities.media import Series
from showsync.core.events import SeriesAddedEvent
from showsync.core.ports.repositories import ISeriesRepository
from showsync.services.series_refresh import SeriesRefreshService


@dataclass(frozen=True)
class RefreshSeriesCommand:
    """Commande de rafraichissement ; sans series_id, toutes les series."""

    series_id: Optional[str] = None


@dataclass
class RefreshAllSummary:
    """Bilan d'un rafraichissement de toutes les series."""

    refreshed: list[Series] = field(default_factory=list)
    failed: dict[str, Exception] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.refreshed) + len(self.failed)


def _sync_order_key(series: Series) -> tuple[bool, datetime]:
    # Jamais synchronisee -> en tete
    return (series.last_info_sync is not None, series.last_info_sync or datetime.min)


class RefreshController:
    """
    Declenche les rafraichissements de series.

    Example:
        controller = RefreshController(series_repo, refresh_service)
        await controller.execute(RefreshSeriesCommand(series_id="12"))
        await controller.execute(RefreshSeriesCommand())  # toutes les series
    """

    def __init__(
        self,
        series_repo: ISeriesRepository,
        refresh_service: SeriesRefreshService,
    ) -> None:
        self._series_repo = series_repo
        self._refresh_service = refresh_service
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()

    async def execute(self, command: RefreshSeriesCommand) -> Optional[RefreshAllSummary]:
        """
        Execute une commande de rafraichissement.

        Returns:
            None pour une serie unique, le bilan pour toutes les series
        """
        if command.series_id is not None:
            await self.refresh_one(command.series_id)
            return None
        return await self.refresh_all()

    async def handle_series_added(self, event: SeriesAddedEvent) -> None:
        """Rafraichit une serie qui vient d'etre ajoutee."""
        await self.refresh_one(event.series.id)

    async def refresh_one(self, series_id: str) -> Series:
        """Rafraichit une serie ; les erreurs remontent a l'appelant."""
        lock = self._locks.setdefault(series_id, asyncio.Lock())
        self._lock_users[series_id] += 1
        try:
            async with lock:
                return await self._refresh_service.refresh_series(series_id)
        finally:
            self._lock_users[series_id] -= 1
            if not self._lock_users[series_id]:
                del self._lock_users[series_id]
                del self._locks[series_id]

    async def refresh_all(self) -> RefreshAllSummary:
        """
        Rafraichit toutes les series, sequentiellement.

        L'echec d'une serie est journalise et n'empeche pas les suivantes.
        """
        ids = [s.id for s in sorted(self._series_repo.list_all(), key=_sync_order_key)]
        logger.info(f"Rafraichissement de {len(ids)} serie(s)")

        summary = RefreshAllSummary()
        for series_id in ids:
            try:
                summary.refreshed.append(await self.refresh_one(series_id))
            except Exception as e:
                logger.exception(f"Echec du rafraichissement de la serie {series_id}")
                summary.failed[series_id] = e

        if summary.failed:
            logger.warning(
                f"Rafraichissement termine : {len(summary.refreshed)} reussi(s), "
                f"{len(summary.failed)} echec(s)"
            )
        return summary
