"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des données
- ISeriesRepository : Stockage des métadonnées de séries
- ISeasonRepository : Stockage des saisons
- IEpisodeRepository : Stockage des métadonnées d'épisodes

Ports fournisseur : Contrats pour les services externes
- ISeriesInfoProvider : Fiches séries et épisodes
- SeriesInfo / EpisodeInfo : Fiches distantes

Port événements :
- IEventPublisher : Publication des notifications
"""

from showsync.core.ports.api_clients import (
    EpisodeInfo,
    ISeriesInfoProvider,
    SeriesInfo,
    SeriesInfoNotFoundError,
)
from showsync.core.ports.events import IEventPublisher
from showsync.core.ports.repositories import (
    IEpisodeRepository,
    ISeasonRepository,
    ISeriesRepository,
)

__all__ = [
    # Repositories
    "ISeriesRepository",
    "ISeasonRepository",
    "IEpisodeRepository",
    # Fournisseur
    "ISeriesInfoProvider",
    "SeriesInfo",
    "EpisodeInfo",
    "SeriesInfoNotFoundError",
    # Evenements
    "IEventPublisher",
]
