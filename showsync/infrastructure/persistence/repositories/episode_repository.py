"""
Implementation SQLModel du repository Episode.

Implemente l'interface IEpisodeRepository pour la persistance des episodes
dans la base de donnees SQLite via SQLModel. Les ecritures se font par lot,
avec un seul commit par lot.
"""

from datetime import datetime

from sqlmodel import Session, select

from showsync.core.entities.media import Episode
from showsync.core.ports.repositories import IEpisodeRepository
from showsync.infrastructure.persistence.models import EpisodeModel


class SQLModelEpisodeRepository(IEpisodeRepository):
    """
    Repository SQLModel pour les episodes de series.

    Implemente IEpisodeRepository avec conversion bidirectionnelle
    entre l'entite Episode (domaine) et EpisodeModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: EpisodeModel) -> Episode:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele EpisodeModel depuis la DB

        Retourne :
            L'entite Episode correspondante
        """
        return Episode(
            id=str(model.id) if model.id else None,
            series_id=str(model.series_id) if model.series_id else None,
            tvdb_episode_id=model.tvdb_episode_id,
            season_number=model.season_number,
            episode_number=model.episode_number,
            title=model.title,
            overview=model.overview,
            air_date=model.air_date,
            episode_file_id=model.episode_file_id,
            ignored=model.ignored,
        )

    def _apply(self, model: EpisodeModel, entity: Episode) -> None:
        """Recopie les champs de l'entite sur le modele."""
        model.series_id = int(entity.series_id) if entity.series_id else 0
        model.tvdb_episode_id = entity.tvdb_episode_id
        model.season_number = entity.season_number
        model.episode_number = entity.episode_number
        model.title = entity.title
        model.overview = entity.overview
        model.air_date = entity.air_date
        model.episode_file_id = entity.episode_file_id
        model.ignored = entity.ignored

    def get_by_series(self, series_id: str) -> list[Episode]:
        """Recupere les episodes d'une serie, par (saison, episode) croissants."""
        statement = (
            select(EpisodeModel)
            .where(EpisodeModel.series_id == int(series_id))
            .order_by(EpisodeModel.season_number, EpisodeModel.episode_number)
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def insert_many(self, episodes: list[Episode]) -> list[Episode]:
        """Insere un lot d'episodes et retourne les entites avec leur ID."""
        models = []
        for episode in episodes:
            model = EpisodeModel(
                series_id=0,
                season_number=episode.season_number,
                episode_number=episode.episode_number,
            )
            self._apply(model, episode)
            models.append(model)

        self._session.add_all(models)
        self._session.commit()
        for model in models:
            self._session.refresh(model)
        return [self._to_entity(model) for model in models]

    def update_many(self, episodes: list[Episode]) -> list[Episode]:
        """
        Met a jour un lot d'episodes existants.

        Lève :
            LookupError : Si un episode n'a pas d'ID ou n'existe pas en base
        """
        models = []
        now = datetime.utcnow()
        for episode in episodes:
            model = self._session.get(EpisodeModel, int(episode.id)) if episode.id else None
            if model is None:
                self._session.rollback()
                raise LookupError(f"Episode {episode.id} not found, cannot update")
            self._apply(model, episode)
            model.updated_at = now
            models.append(model)

        self._session.add_all(models)
        self._session.commit()
        for model in models:
            self._session.refresh(model)
        return [self._to_entity(model) for model in models]
