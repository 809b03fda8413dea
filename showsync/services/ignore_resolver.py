"""
Valeur par defaut du drapeau "ignored" des episodes decouverts.
"""

from showsync.core.entities.media import Season


def resolve_ignored(
    season_number: int, episode_number: int, seasons: list[Season]
) -> bool:
    """
    Calcule le drapeau "ignored" d'un nouvel episode.

    Un episode 0 hors saison 1 (special, avant-premiere) est toujours ignore.
    Sinon l'episode herite du drapeau de sa saison, False si la saison
    n'existe pas encore.

    Args:
        season_number: Numero de saison de l'episode
        episode_number: Numero d'episode
        seasons: Saisons connues de la serie

    Returns:
        True si l'episode doit etre ignore
    """
    if episode_number == 0 and season_number != 1:
        return True

    season = next((s for s in seasons if s.season_number == season_number), None)
    return season is not None and season.ignored
