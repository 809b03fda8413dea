"""
Rafraichissement des episodes d'une serie.

Reconcilie la liste d'episodes TVDB avec les episodes locaux :
- rapprochement de chaque fiche (episode_matcher)
- drapeau "ignored" des nouveaux episodes (ignore_resolver)
- dedoublonnage des dates de diffusion (air_date_resolver)
- persistance par lot et publication des evenements

Une fiche en erreur est journalisee et comptee sans interrompre le lot.
"""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from showsync.core.entities.media import Episode, Season, Series
from showsync.core.events import EpisodeInfoAddedEvent, EpisodeInfoUpdatedEvent
from showsync.core.ports.api_clients import EpisodeInfo
from showsync.core.ports.events import IEventPublisher
from showsync.core.ports.repositories import IEpisodeRepository, ISeasonRepository
from showsync.services.air_date_resolver import resolve_air_date_conflicts
from showsync.services.episode_matcher import (
    EpisodeRefreshError,
    apply_remote_fields,
    find_episode_to_update,
    validate_episode_info,
)
from showsync.services.ignore_resolver import resolve_ignored


def _processing_order(remote: EpisodeInfo) -> tuple[bool, int, int]:
    # Fiches mal numerotees en fin de lot, dans l'ordre recu
    if not remote.has_valid_numbering:
        return (True, 0, 0)
    return (False, remote.season_number, remote.episode_number)


@dataclass
class EpisodeOutcome:
    """
    Resultat du traitement d'une fiche episode.

    Exactement un des deux champs episode / error est renseigne.
    """

    remote: EpisodeInfo
    episode: Optional[Episode] = None
    is_new: bool = False
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class EpisodeRefreshResult:
    """Bilan du rafraichissement des episodes d'une serie."""

    added: list[Episode] = field(default_factory=list)
    updated: list[Episode] = field(default_factory=list)
    failures: list[EpisodeOutcome] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.added) + len(self.updated)

    @property
    def failure_count(self) -> int:
        return len(self.failures)


class EpisodeRefreshService:
    """
    Service de reconciliation des episodes d'une serie.

    Produit un ensemble minimal d'insertions et de mises a jour, en
    conservant les liens fichiers et les drapeaux "ignored" locaux.
    """

    def __init__(
        self,
        episode_repo: IEpisodeRepository,
        season_repo: ISeasonRepository,
        event_publisher: IEventPublisher,
    ) -> None:
        self._episode_repo = episode_repo
        self._season_repo = season_repo
        self._event_publisher = event_publisher

    def refresh_episodes(
        self, series: Series, remote_episodes: list[EpisodeInfo]
    ) -> EpisodeRefreshResult:
        """
        Reconcilie les fiches episodes distantes d'une serie.

        Les fiches sont traitees par (saison, episode) croissants pour que
        les logs et les compteurs soient reproductibles.

        Args:
            series: Serie deja rafraichie (son runtime sert au dedoublonnage)
            remote_episodes: Fiches episodes du fournisseur

        Returns:
            Bilan avec les episodes ajoutes, mis a jour et les echecs
        """
        logger.trace(f"Debut du rafraichissement des episodes de : {series.title or series.id}")

        local_episodes = self._episode_repo.get_by_series(series.id)
        seasons = self._season_repo.get_by_series(series.id)

        result = EpisodeRefreshResult()
        claimed: dict[str, EpisodeInfo] = {}

        for remote in sorted(remote_episodes, key=_processing_order):
            outcome = self._process_remote_episode(
                series, remote, local_episodes, seasons, claimed
            )
            if not outcome.succeeded:
                result.failures.append(outcome)
            elif outcome.is_new:
                result.added.append(outcome.episode)
            else:
                result.updated.append(outcome.episode)

        resolve_air_date_conflicts(result.added + result.updated, series.runtime)

        if result.added:
            result.added = self._episode_repo.insert_many(result.added)
        if result.updated:
            result.updated = self._episode_repo.update_many(result.updated)

        if result.added:
            self._event_publisher.publish(
                EpisodeInfoAddedEvent(episodes=tuple(result.added), series=series)
            )
        if result.updated:
            self._event_publisher.publish(
                EpisodeInfoUpdatedEvent(episodes=tuple(result.updated))
            )

        if result.failure_count:
            logger.info(
                f"Rafraichissement des episodes termine pour : {series.title}. "
                f"Reussis : {result.success_count} - Echecs : {result.failure_count}"
            )
        else:
            logger.info(f"Rafraichissement des episodes termine pour : {series.title}.")

        return result

    def _process_remote_episode(
        self,
        series: Series,
        remote: EpisodeInfo,
        local_episodes: list[Episode],
        seasons: list[Season],
        claimed: dict[str, EpisodeInfo],
    ) -> EpisodeOutcome:
        """Traite une fiche ; toute erreur devient un EpisodeOutcome en echec."""
        try:
            logger.trace(f"Mise a jour de [{series.title}] - {remote.label}")
            validate_episode_info(remote)

            existing = find_episode_to_update(remote, local_episodes)
            if existing is None:
                episode = Episode(
                    ignored=resolve_ignored(
                        remote.season_number, remote.episode_number, seasons
                    )
                )
                is_new = True
            else:
                previous = claimed.get(existing.id)
                if previous is not None:
                    raise EpisodeRefreshError(
                        f"Episode {existing.id} already matched by {previous.label} "
                        f"in this refresh, cannot also match {remote.label}"
                    )
                claimed[existing.id] = remote
                episode = existing
                is_new = False

            updated = apply_remote_fields(episode, remote, series.id)
            return EpisodeOutcome(remote=remote, episode=updated, is_new=is_new)

        except Exception as e:
            logger.opt(exception=e).critical(
                f"Erreur lors de la mise a jour des episodes de la serie {series.title} "
                f"({remote.label})"
            )
            return EpisodeOutcome(remote=remote, error=e)
