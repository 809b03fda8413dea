"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
Inclut les repositories SQLModel, le client TVDB, le bus d'evenements
et les services de rafraichissement.
"""

from dependency_injector import containers, providers

from .adapters.api.tvdb_client import TVDBClient
from .adapters.messaging.event_bus import InMemoryEventBus
from .config import Settings
from .core.events import SeriesAddedEvent
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelEpisodeRepository,
    SQLModelSeasonRepository,
    SQLModelSeriesRepository,
)
from .services.episode_refresh import EpisodeRefreshService
from .services.refresh_controller import RefreshController
from .services.series_refresh import SeriesRefreshService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        register_event_handlers(container)
        controller = container.refresh_controller()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repositories - Factory pour nouvelle instance avec session fraiche
    series_repository = providers.Factory(
        SQLModelSeriesRepository,
        session=session,
    )
    season_repository = providers.Factory(
        SQLModelSeasonRepository,
        session=session,
    )
    episode_repository = providers.Factory(
        SQLModelEpisodeRepository,
        session=session,
    )

    # Bus d'evenements - Singleton partage par les emetteurs et les abonnes
    event_bus = providers.Singleton(InMemoryEventBus)

    # Client TVDB - Singleton avec api_key depuis config
    tvdb_client = providers.Singleton(
        TVDBClient,
        api_key=config.provided.tvdb_api_key,
        language=config.provided.tvdb_language,
        timeout=config.provided.tvdb_timeout_seconds,
        max_attempts=config.provided.tvdb_max_attempts,
    )

    episode_refresh_service = providers.Factory(
        EpisodeRefreshService,
        episode_repo=episode_repository,
        season_repo=season_repository,
        event_publisher=event_bus,
    )

    series_refresh_service = providers.Factory(
        SeriesRefreshService,
        series_repo=series_repository,
        series_info_provider=tvdb_client,
        episode_refresh=episode_refresh_service,
        event_publisher=event_bus,
    )

    # Singleton : les verrous par serie doivent etre partages entre la
    # commande de rafraichissement et le handler SeriesAddedEvent
    refresh_controller = providers.Singleton(
        RefreshController,
        series_repo=series_repository,
        refresh_service=series_refresh_service,
    )


def register_event_handlers(container: Container) -> None:
    """Abonne le rafraichissement aux ajouts de series."""
    bus = container.event_bus()
    bus.subscribe(SeriesAddedEvent, container.refresh_controller().handle_series_added)
