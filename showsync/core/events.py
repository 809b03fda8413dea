"""
Evenements echanges autour du rafraichissement des series.

Les evenements sont des valeurs immuables publiees sur le bus, sans contrat
d'acquittement. Le rafraichissement consomme SeriesAddedEvent et produit
les trois autres.
"""

from dataclasses import dataclass

from showsync.core.entities.media import Episode, Series


@dataclass(frozen=True)
class SeriesAddedEvent:
    """Une serie vient d'etre ajoutee a la bibliotheque."""

    series: Series


@dataclass(frozen=True)
class SeriesUpdatedEvent:
    """Les metadonnees d'une serie ont ete rafraichies."""

    series: Series


@dataclass(frozen=True)
class EpisodeInfoAddedEvent:
    """Des episodes ont ete decouverts lors d'un rafraichissement."""

    episodes: tuple[Episode, ...]
    series: Series


@dataclass(frozen=True)
class EpisodeInfoUpdatedEvent:
    """Des episodes existants ont ete mis a jour lors d'un rafraichissement."""

    episodes: tuple[Episode, ...]
