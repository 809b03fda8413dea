"""
Rafraichissement des metadonnees d'une serie.

Recupere la fiche TVDB d'une serie, remplace ses champs descriptifs,
persiste la serie puis delegue la reconciliation des episodes.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable

from loguru import logger

from showsync.core.entities.media import Series
from showsync.core.events import SeriesUpdatedEvent
from showsync.core.ports.api_clients import ISeriesInfoProvider, SeriesInfo
from showsync.core.ports.events import IEventPublisher
from showsync.core.ports.repositories import ISeriesRepository
from showsync.services.episode_refresh import EpisodeRefreshService
from showsync.utils.helpers import normalize_title


class SeriesNotFoundError(Exception):
    """La serie demandee n'existe pas dans la bibliotheque locale."""

    def __init__(self, series_id: str) -> None:
        self.series_id = series_id
        super().__init__(f"Series {series_id} not found in library")


class MissingProviderIdError(Exception):
    """La serie n'a pas d'ID TVDB : impossible de recuperer sa fiche."""

    def __init__(self, series_id: str) -> None:
        self.series_id = series_id
        super().__init__(f"Series {series_id} has no tvdb_id")


def merge_series_info(series: Series, info: SeriesInfo, synced_at: datetime) -> Series:
    """
    Remplace les champs descriptifs d'une serie par ceux de la fiche distante.

    Remplacement complet (pas de diff champ a champ). L'identite locale
    (id, tvdb_id) est conservee.

    Args:
        series: Serie locale
        info: Fiche serie distante
        synced_at: Horodatage du rafraichissement

    Returns:
        Nouvelle instance de Series
    """
    return replace(
        series,
        title=info.title,
        clean_title=normalize_title(info.title),
        air_time=info.air_time,
        overview=info.overview,
        status=info.status,
        runtime=info.runtime,
        images=info.images,
        network=info.network,
        first_aired=info.first_aired,
        last_info_sync=synced_at,
    )


class SeriesRefreshService:
    """
    Service de rafraichissement d'une serie et de ses episodes.

    Les erreurs de recuperation distante et de persistance remontent a
    l'appelant ; les erreurs par episode sont absorbees par
    EpisodeRefreshService.
    """

    def __init__(
        self,
        series_repo: ISeriesRepository,
        series_info_provider: ISeriesInfoProvider,
        episode_refresh: EpisodeRefreshService,
        event_publisher: IEventPublisher,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._series_repo = series_repo
        self._provider = series_info_provider
        self._episode_refresh = episode_refresh
        self._event_publisher = event_publisher
        self._clock = clock

    async def refresh_series(self, series_id: str) -> Series:
        """
        Rafraichit une serie depuis le fournisseur de metadonnees.

        Args:
            series_id: ID interne de la serie

        Returns:
            La serie rafraichie, telle que persistee

        Raises:
            SeriesNotFoundError: Si la serie n'existe pas localement
            MissingProviderIdError: Si la serie n'a pas d'ID TVDB
        """
        series = self._series_repo.get_by_id(series_id)
        if series is None:
            raise SeriesNotFoundError(series_id)
        if series.tvdb_id is None:
            raise MissingProviderIdError(series_id)

        series_info, remote_episodes = await self._provider.get_series_info(series.tvdb_id)

        series = merge_series_info(series, series_info, self._clock())
        series = self._series_repo.save(series)
        logger.debug(f"Serie mise a jour : {series.title} (tvdb {series.tvdb_id})")

        self._episode_refresh.refresh_episodes(series, remote_episodes)

        self._event_publisher.publish(SeriesUpdatedEvent(series=series))
        return series
