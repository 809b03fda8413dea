"""
Identification des episodes distants dans la bibliotheque locale.

Une fiche episode TVDB est rapprochee d'un episode local en deux etapes :
1. ID TVDB de l'episode identique
2. Couple (saison, episode) identique

Sans correspondance, la fiche designe un nouvel episode.
"""

from dataclasses import replace
from typing import Optional

from loguru import logger

from showsync.core.entities.media import Episode
from showsync.core.ports.api_clients import EpisodeInfo


class EpisodeRefreshError(Exception):
    """Erreur liee au traitement d'une seule fiche episode."""


class AmbiguousEpisodeMatchError(EpisodeRefreshError):
    """
    Plusieurs episodes locaux correspondent a la meme fiche distante.

    Attributs :
        remote : Fiche distante concernee
        candidates : Episodes locaux en collision
    """

    def __init__(self, remote: EpisodeInfo, candidates: list[Episode]) -> None:
        self.remote = remote
        self.candidates = candidates
        ids = ", ".join(str(e.id) for e in candidates)
        super().__init__(
            f"{len(candidates)} local episodes match {remote.label} "
            f"(tvdb_episode_id={remote.tvdb_episode_id}): {ids}"
        )


class InvalidEpisodeInfoError(EpisodeRefreshError):
    """Fiche episode distante inexploitable (numerotation invalide)."""


def validate_episode_info(remote: EpisodeInfo) -> None:
    """
    Verifie qu'une fiche distante est exploitable.

    Lève :
        InvalidEpisodeInfoError : Si la saison ou l'episode manque, n'est pas
            un entier ou est negatif
    """
    if not remote.has_valid_numbering:
        raise InvalidEpisodeInfoError(
            f"Invalid numbering for tvdb episode {remote.tvdb_episode_id}: "
            f"season={remote.season_number}, episode={remote.episode_number}"
        )


def _matches(local: Episode, remote: EpisodeInfo) -> bool:
    if remote.tvdb_episode_id is not None and local.tvdb_episode_id == remote.tvdb_episode_id:
        return True
    return (
        local.season_number == remote.season_number
        and local.episode_number == remote.episode_number
    )


def find_episode_to_update(
    remote: EpisodeInfo, local_episodes: list[Episode]
) -> Optional[Episode]:
    """
    Retrouve l'episode local correspondant a une fiche distante.

    L'ID TVDB est prioritaire : un episode dont l'ID correspond est retenu
    meme si sa numerotation differe. Le couple (saison, episode) ne sert
    qu'a defaut.

    Args:
        remote: Fiche episode distante
        local_episodes: Episodes locaux de la serie

    Returns:
        L'episode local a mettre a jour, ou None pour un nouvel episode

    Raises:
        AmbiguousEpisodeMatchError: Si plusieurs episodes locaux correspondent
    """
    candidates = [e for e in local_episodes if _matches(e, remote)]
    if len(candidates) > 1:
        raise AmbiguousEpisodeMatchError(remote, candidates)
    return candidates[0] if candidates else None


def apply_remote_fields(
    episode: Episode, remote: EpisodeInfo, series_id: Optional[str]
) -> Episode:
    """
    Applique les champs distants sur une copie de l'episode.

    Si la numerotation change alors qu'un fichier est lie, le lien est
    supprime avant l'ecrasement : un fichier lie sous une numerotation ne
    doit jamais rester lie sous une autre. Le drapeau "ignored" est conserve.

    Args:
        episode: Episode local (ou nouvel episode vierge)
        remote: Fiche episode distante
        series_id: ID de la serie parente

    Returns:
        Nouvelle instance d'Episode a persister
    """
    renumbered = (
        episode.season_number != remote.season_number
        or episode.episode_number != remote.episode_number
    )
    episode_file_id = episode.episode_file_id
    if renumbered and episode.has_file:
        logger.debug(
            f"Suppression du lien fichier {episode_file_id} : "
            f"{episode.label} devient {remote.label}"
        )
        episode_file_id = 0

    return replace(
        episode,
        series_id=series_id,
        tvdb_episode_id=remote.tvdb_episode_id,
        season_number=remote.season_number,
        episode_number=remote.episode_number,
        title=remote.title,
        overview=remote.overview,
        air_date=remote.air_date,
        episode_file_id=episode_file_id,
    )
