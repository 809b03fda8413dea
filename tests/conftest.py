"""
Fixtures pytest partagees pour les tests Showsync.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (repositories, fournisseur TVDB, publication d'evenements)
- Entites de reference (serie, saisons)
- Settings de test avec chemins temporaires
"""

from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from showsync.config import Settings
from showsync.core.entities.media import Season, Series, SeriesStatus
from showsync.core.ports.api_clients import ISeriesInfoProvider
from showsync.core.ports.events import IEventPublisher
from showsync.core.ports.repositories import (
    IEpisodeRepository,
    ISeasonRepository,
    ISeriesRepository,
)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec base et logs dans tmp_path."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        tvdb_api_key="test-api-key",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def series() -> Series:
    """Serie locale deja connue (runtime 30 minutes)."""
    return Series(
        id="1",
        tvdb_id=81189,
        title="Breaking Bad",
        clean_title="breakingbad",
        status=SeriesStatus.CONTINUING,
        runtime=30,
        last_info_sync=datetime(2024, 1, 1, 12, 0),
    )


@pytest.fixture
def seasons() -> list[Season]:
    """Saison 1 suivie, saison 2 ignoree."""
    return [
        Season(id="10", series_id="1", season_number=1, ignored=False),
        Season(id="11", series_id="1", season_number=2, ignored=True),
    ]


@pytest.fixture
def mock_episode_repo() -> MagicMock:
    """
    Mock de IEpisodeRepository.

    insert_many / update_many renvoient les episodes recus ; get_by_series
    renvoie une liste vide par defaut.
    """
    repo = MagicMock(spec=IEpisodeRepository)
    repo.get_by_series.return_value = []
    repo.insert_many.side_effect = lambda episodes: list(episodes)
    repo.update_many.side_effect = lambda episodes: list(episodes)
    return repo


@pytest.fixture
def mock_season_repo(seasons: list[Season]) -> MagicMock:
    """Mock de ISeasonRepository renvoyant les saisons de reference."""
    repo = MagicMock(spec=ISeasonRepository)
    repo.get_by_series.return_value = seasons
    return repo


@pytest.fixture
def mock_series_repo(series: Series) -> MagicMock:
    """Mock de ISeriesRepository ; save renvoie la serie recue."""
    repo = MagicMock(spec=ISeriesRepository)
    repo.get_by_id.return_value = series
    repo.list_all.return_value = [series]
    repo.save.side_effect = lambda s: s
    return repo


@pytest.fixture
def mock_publisher() -> MagicMock:
    """Mock de IEventPublisher."""
    return MagicMock(spec=IEventPublisher)


@pytest.fixture
def mock_provider() -> MagicMock:
    """Mock de ISeriesInfoProvider (get_series_info asynchrone)."""
    provider = MagicMock(spec=ISeriesInfoProvider)
    provider.get_series_info = AsyncMock()
    return provider
