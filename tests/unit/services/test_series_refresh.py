"""
Tests pour SeriesRefreshService.

Tests couvrant:
- Remplacement des champs descriptifs
- Horodatage last_info_sync
- Ordre persistance / episodes / evenement
- Propagation des erreurs du fournisseur
"""

from datetime import date, datetime
from unittest.mock import MagicMock, call

import httpx
import pytest

from showsync.core.entities.media import MediaCover, MediaCoverType, SeriesStatus
from showsync.core.events import SeriesUpdatedEvent
from showsync.core.ports.api_clients import EpisodeInfo, SeriesInfo, SeriesInfoNotFoundError
from showsync.services.episode_refresh import EpisodeRefreshResult, EpisodeRefreshService
from showsync.services.series_refresh import (
    MissingProviderIdError,
    SeriesNotFoundError,
    SeriesRefreshService,
    merge_series_info,
)

SYNC_TIME = datetime(2024, 6, 1, 8, 30)


@pytest.fixture
def series_info() -> SeriesInfo:
    """Fiche TVDB de Breaking Bad."""
    return SeriesInfo(
        tvdb_id=81189,
        title="The Breaking Bad",
        air_time="21:00",
        overview="A chemistry teacher...",
        status=SeriesStatus.ENDED,
        runtime=47,
        images=(MediaCover(MediaCoverType.POSTER, "https://artworks.thetvdb.com/banners/p.jpg"),),
        network="AMC",
        first_aired=date(2008, 1, 20),
    )


@pytest.fixture
def remote_episodes() -> list[EpisodeInfo]:
    return [EpisodeInfo(tvdb_episode_id=349232, season_number=1, episode_number=1, title="Pilot")]


@pytest.fixture
def mock_episode_refresh() -> MagicMock:
    """Mock de EpisodeRefreshService."""
    service = MagicMock(spec=EpisodeRefreshService)
    service.refresh_episodes.return_value = EpisodeRefreshResult()
    return service


@pytest.fixture
def service(mock_series_repo, mock_provider, mock_episode_refresh, mock_publisher):
    """Service avec horloge figee."""
    return SeriesRefreshService(
        series_repo=mock_series_repo,
        series_info_provider=mock_provider,
        episode_refresh=mock_episode_refresh,
        event_publisher=mock_publisher,
        clock=lambda: SYNC_TIME,
    )


class TestMergeSeriesInfo:
    """Tests pour merge_series_info."""

    def test_replaces_descriptive_fields(self, series, series_info):
        """Tous les champs descriptifs viennent de la fiche distante."""
        merged = merge_series_info(series, series_info, SYNC_TIME)

        assert merged.title == "The Breaking Bad"
        assert merged.air_time == "21:00"
        assert merged.overview == "A chemistry teacher..."
        assert merged.status == SeriesStatus.ENDED
        assert merged.runtime == 47
        assert merged.images == series_info.images
        assert merged.network == "AMC"
        assert merged.first_aired == date(2008, 1, 20)

    def test_keeps_identity(self, series, series_info):
        """id et tvdb_id sont conserves."""
        merged = merge_series_info(series, series_info, SYNC_TIME)

        assert merged.id == "1"
        assert merged.tvdb_id == 81189

    def test_clean_title_derived_from_title(self, series, series_info):
        """clean_title est recalcule a partir du nouveau titre."""
        merged = merge_series_info(series, series_info, SYNC_TIME)

        assert merged.clean_title == "breakingbad"

    def test_missing_remote_values_overwrite_local(self, series):
        """Remplacement complet : une valeur absente efface la valeur locale."""
        series.network = "AMC"
        info = SeriesInfo(tvdb_id=81189, title="Breaking Bad")

        merged = merge_series_info(series, info, SYNC_TIME)

        assert merged.network is None
        assert merged.runtime == 0

    def test_sets_last_info_sync(self, series, series_info):
        """last_info_sync prend l'horodatage fourni."""
        assert merge_series_info(series, series_info, SYNC_TIME).last_info_sync == SYNC_TIME


class TestRefreshSeries:
    """Tests pour SeriesRefreshService.refresh_series."""

    @pytest.mark.asyncio
    async def test_refreshes_series_and_episodes(
        self,
        service,
        mock_series_repo,
        mock_provider,
        mock_episode_refresh,
        series_info,
        remote_episodes,
    ):
        """Cas nominal : fiche recuperee, serie persistee, episodes reconcilies."""
        mock_provider.get_series_info.return_value = (series_info, remote_episodes)

        refreshed = await service.refresh_series("1")

        mock_provider.get_series_info.assert_awaited_once_with(81189)
        saved = mock_series_repo.save.call_args.args[0]
        assert saved.title == "The Breaking Bad"
        assert saved.last_info_sync == SYNC_TIME
        mock_episode_refresh.refresh_episodes.assert_called_once_with(saved, remote_episodes)
        assert refreshed is saved

    @pytest.mark.asyncio
    async def test_episodes_use_updated_runtime(
        self, service, mock_provider, mock_episode_refresh, series_info, remote_episodes
    ):
        """Les episodes sont reconcilies avec le runtime deja mis a jour."""
        mock_provider.get_series_info.return_value = (series_info, remote_episodes)

        await service.refresh_series("1")

        series_arg = mock_episode_refresh.refresh_episodes.call_args.args[0]
        assert series_arg.runtime == 47

    @pytest.mark.asyncio
    async def test_event_published_after_persistence(
        self,
        service,
        mock_series_repo,
        mock_provider,
        mock_episode_refresh,
        mock_publisher,
        series_info,
    ):
        """Ordre : save, reconciliation des episodes, puis SeriesUpdatedEvent."""
        mock_provider.get_series_info.return_value = (series_info, [])
        tracker = MagicMock()
        tracker.attach_mock(mock_series_repo.save, "save")
        tracker.attach_mock(mock_episode_refresh.refresh_episodes, "refresh_episodes")
        tracker.attach_mock(mock_publisher.publish, "publish")

        refreshed = await service.refresh_series("1")

        names = [c[0] for c in tracker.mock_calls]
        assert names == ["save", "refresh_episodes", "publish"]
        assert mock_publisher.publish.call_args == call(SeriesUpdatedEvent(series=refreshed))

    @pytest.mark.asyncio
    async def test_series_not_found(self, service, mock_series_repo, mock_provider):
        """Serie inconnue : SeriesNotFoundError, pas d'appel distant."""
        mock_series_repo.get_by_id.return_value = None

        with pytest.raises(SeriesNotFoundError):
            await service.refresh_series("404")

        mock_provider.get_series_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_tvdb_id(self, service, series, mock_provider):
        """Serie sans tvdb_id : MissingProviderIdError."""
        series.tvdb_id = None

        with pytest.raises(MissingProviderIdError):
            await service.refresh_series("1")

        mock_provider.get_series_info.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [SeriesInfoNotFoundError(81189), httpx.ConnectError("boom")],
    )
    async def test_provider_error_aborts_without_writes(
        self,
        service,
        series,
        mock_series_repo,
        mock_provider,
        mock_episode_refresh,
        mock_publisher,
        error,
    ):
        """Erreur distante : propagee, rien n'est persiste ni publie."""
        mock_provider.get_series_info.side_effect = error

        with pytest.raises(type(error)):
            await service.refresh_series("1")

        mock_series_repo.save.assert_not_called()
        mock_episode_refresh.refresh_episodes.assert_not_called()
        mock_publisher.publish.assert_not_called()
        assert series.last_info_sync == datetime(2024, 1, 1, 12, 0)

    @pytest.mark.asyncio
    async def test_episode_failures_do_not_fail_series(
        self, service, mock_provider, mock_episode_refresh, mock_publisher, series_info
    ):
        """Des echecs par episode n'empechent pas la publication de SeriesUpdatedEvent."""
        mock_provider.get_series_info.return_value = (series_info, [])
        result = EpisodeRefreshResult()
        result.failures.append(MagicMock())
        mock_episode_refresh.refresh_episodes.return_value = result

        await service.refresh_series("1")

        mock_publisher.publish.assert_called_once()
