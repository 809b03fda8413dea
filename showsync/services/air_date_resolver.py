"""
Dedoublonnage des dates de diffusion au sein d'un rafraichissement.

TVDB publie souvent la meme date pour plusieurs episodes diffuses a la
suite (double episode, marathon). Les episodes en collision sont decales
de la duree d'un episode, dans l'ordre (saison, episode).
"""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Optional

from showsync.core.entities.media import Episode


def resolve_air_date_conflicts(episodes: list[Episode], runtime: int) -> list[Episode]:
    """
    Decale les dates de diffusion en collision dans le lot.

    Les episodes sont groupes par (serie, date de diffusion). Dans chaque
    groupe de plus d'un episode, le i-eme episode (tri par saison puis
    episode, i a partir de 0) recoit date + runtime * i minutes. Seuls les
    episodes du lot sont consideres.

    Args:
        episodes: Episodes du rafraichissement (nouveaux et mis a jour),
            modifies sur place
        runtime: Duree d'un episode en minutes

    Returns:
        Liste des episodes dont la date a ete decalee
    """
    groups: dict[tuple[Optional[str], datetime], list[Episode]] = defaultdict(list)
    for episode in episodes:
        if episode.air_date is not None:
            groups[(episode.series_id, episode.air_date)].append(episode)

    shifted: list[Episode] = []
    for (_, air_date), group in groups.items():
        if len(group) < 2:
            continue
        ordered = sorted(group, key=lambda e: (e.season_number, e.episode_number))
        for index, episode in enumerate(ordered):
            if index == 0:
                continue
            episode.air_date = air_date + timedelta(minutes=runtime * index)
            shifted.append(episode)

    return shifted
