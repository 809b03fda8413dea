"""
Interfaces ports pour les fournisseurs de métadonnées.

Interfaces abstraites (ports) définissant le contrat du fournisseur de fiches
séries. L'implémentation concrète (TVDB) vit dans adapters/api/.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from showsync.core.entities.media import MediaCover, SeriesStatus


class SeriesInfoNotFoundError(Exception):
    """
    Exception levée quand le fournisseur ne connaît pas la série demandée.

    Attributs :
        tvdb_id : ID TVDB demandé
    """

    def __init__(self, tvdb_id: int) -> None:
        self.tvdb_id = tvdb_id
        super().__init__(f"Series {tvdb_id} not found on metadata provider")


@dataclass(frozen=True)
class SeriesInfo:
    """
    Fiche série telle que publiée par le fournisseur.

    Attributs :
        tvdb_id : ID TVDB de la série
        title : Titre de la série
        air_time : Heure de diffusion (format "HH:MM"), si connue
        overview : Description
        status : Statut de diffusion
        runtime : Durée d'un épisode en minutes
        images : Illustrations (poster, bannière, fanart)
        network : Chaîne de diffusion
        first_aired : Date de première diffusion
    """

    tvdb_id: int
    title: str
    air_time: Optional[str] = None
    overview: Optional[str] = None
    status: SeriesStatus = SeriesStatus.UNKNOWN
    runtime: int = 0
    images: tuple[MediaCover, ...] = ()
    network: Optional[str] = None
    first_aired: Optional[date] = None


@dataclass(frozen=True)
class EpisodeInfo:
    """
    Fiche épisode telle que publiée par le fournisseur.

    Attributs :
        tvdb_episode_id : ID TVDB de l'épisode (peut manquer)
        season_number : Numéro de saison
        episode_number : Numéro d'épisode dans la saison
        title : Titre de l'épisode
        overview : Résumé
        air_date : Date et heure de première diffusion
    """

    tvdb_episode_id: Optional[int]
    season_number: int
    episode_number: int
    title: str = ""
    overview: Optional[str] = None
    air_date: Optional[datetime] = None

    @property
    def label(self) -> str:
        """Libellé court SxxEyy pour les logs (brut si la numérotation est invalide)."""
        if self.has_valid_numbering:
            return f"S{self.season_number:02d}E{self.episode_number:02d}"
        return f"S{self.season_number!r}E{self.episode_number!r}"

    @property
    def has_valid_numbering(self) -> bool:
        """Saison et épisode sont des entiers positifs ou nuls."""
        return all(
            isinstance(n, int) and not isinstance(n, bool) and n >= 0
            for n in (self.season_number, self.episode_number)
        )


class ISeriesInfoProvider(ABC):
    """
    Interface du fournisseur de métadonnées séries.

    Une implémentation peut échouer (réseau, réponse invalide) : l'erreur
    remonte à l'appelant et interrompt le rafraîchissement de la série.
    """

    @abstractmethod
    async def get_series_info(
        self, tvdb_id: int
    ) -> tuple[SeriesInfo, list[EpisodeInfo]]:
        """
        Récupère la fiche complète d'une série et de ses épisodes.

        Args :
            tvdb_id : ID TVDB de la série

        Retourne :
            Tuple (fiche série, liste des fiches épisodes)

        Lève :
            SeriesInfoNotFoundError : Si la série est inconnue du fournisseur
        """
        ...
