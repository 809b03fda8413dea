"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel, mocks pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from showsync.core.entities.media import Episode, Season, Series


class ISeriesRepository(ABC):
    """
    Interface de stockage des métadonnées de séries.

    Définit les opérations pour persister et récupérer les entités Series.
    """

    @abstractmethod
    def get_by_id(self, series_id: str) -> Optional[Series]:
        """Récupère une série par son ID interne."""
        ...

    @abstractmethod
    def get_by_tvdb_id(self, tvdb_id: int) -> Optional[Series]:
        """Récupère une série par son ID TVDB."""
        ...

    @abstractmethod
    def list_all(self) -> list[Series]:
        """Liste toutes les séries connues."""
        ...

    @abstractmethod
    def save(self, series: Series) -> Series:
        """Sauvegarde une série (insertion ou mise à jour)."""
        ...


class ISeasonRepository(ABC):
    """
    Interface de stockage des saisons.

    Les saisons portent le drapeau "ignored" hérité par les nouveaux épisodes.
    """

    @abstractmethod
    def get_by_series(self, series_id: str) -> list[Season]:
        """Récupère les saisons d'une série."""
        ...

    @abstractmethod
    def save(self, season: Season) -> Season:
        """Sauvegarde une saison (insertion ou mise à jour par (série, numéro))."""
        ...


class IEpisodeRepository(ABC):
    """
    Interface de stockage des métadonnées d'épisodes.

    Les écritures se font par lot : un rafraîchissement produit une liste
    d'épisodes nouveaux et une liste d'épisodes mis à jour.
    """

    @abstractmethod
    def get_by_series(self, series_id: str) -> list[Episode]:
        """Récupère tous les épisodes d'une série."""
        ...

    @abstractmethod
    def insert_many(self, episodes: list[Episode]) -> list[Episode]:
        """
        Insère un lot d'épisodes.

        Retourne :
            Les épisodes insérés, avec leur ID attribué
        """
        ...

    @abstractmethod
    def update_many(self, episodes: list[Episode]) -> list[Episode]:
        """
        Met à jour un lot d'épisodes existants (identifiés par leur ID).

        Retourne :
            Les épisodes tels que persistés
        """
        ...
