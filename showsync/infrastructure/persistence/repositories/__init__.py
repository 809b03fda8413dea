"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans showsync/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from showsync.infrastructure.persistence.repositories.episode_repository import (
    SQLModelEpisodeRepository,
)
from showsync.infrastructure.persistence.repositories.season_repository import (
    SQLModelSeasonRepository,
)
from showsync.infrastructure.persistence.repositories.series_repository import (
    SQLModelSeriesRepository,
)

__all__ = [
    "SQLModelSeriesRepository",
    "SQLModelSeasonRepository",
    "SQLModelEpisodeRepository",
]
