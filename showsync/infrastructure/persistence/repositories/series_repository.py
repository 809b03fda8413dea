"""
Implementation SQLModel du repository Series.

Implemente l'interface ISeriesRepository pour la persistance des series TV
dans la base de donnees SQLite via SQLModel.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from showsync.core.entities.media import MediaCover, MediaCoverType, Series, SeriesStatus
from showsync.core.ports.repositories import ISeriesRepository
from showsync.infrastructure.persistence.models import SeriesModel


class SQLModelSeriesRepository(ISeriesRepository):
    """
    Repository SQLModel pour les series TV.

    Implemente ISeriesRepository avec conversion bidirectionnelle
    entre l'entite Series (domaine) et SeriesModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: SeriesModel) -> Series:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele SeriesModel depuis la DB

        Retourne :
            L'entite Series correspondante
        """
        images = tuple(
            MediaCover(cover_type=MediaCoverType(item["cover_type"]), url=item["url"])
            for item in model.images
        )
        return Series(
            id=str(model.id) if model.id else None,
            tvdb_id=model.tvdb_id,
            title=model.title,
            clean_title=model.clean_title,
            air_time=model.air_time,
            overview=model.overview,
            status=SeriesStatus(model.status),
            runtime=model.runtime,
            images=images,
            network=model.network,
            first_aired=model.first_aired,
            last_info_sync=model.last_info_sync,
        )

    def _apply(self, model: SeriesModel, entity: Series) -> None:
        """Recopie les champs de l'entite sur le modele."""
        model.tvdb_id = entity.tvdb_id
        model.title = entity.title
        model.clean_title = entity.clean_title
        model.air_time = entity.air_time
        model.overview = entity.overview
        model.status = entity.status.value
        model.runtime = entity.runtime
        model.images = [
            {"cover_type": cover.cover_type.value, "url": cover.url}
            for cover in entity.images
        ]
        model.network = entity.network
        model.first_aired = entity.first_aired
        model.last_info_sync = entity.last_info_sync

    def get_by_id(self, series_id: str) -> Optional[Series]:
        """Recupere une serie par son ID interne."""
        model = self._session.get(SeriesModel, int(series_id))
        if model:
            return self._to_entity(model)
        return None

    def get_by_tvdb_id(self, tvdb_id: int) -> Optional[Series]:
        """Recupere une serie par son ID TVDB."""
        statement = select(SeriesModel).where(SeriesModel.tvdb_id == tvdb_id)
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def list_all(self) -> list[Series]:
        """Liste toutes les series, par ID croissant."""
        models = self._session.exec(select(SeriesModel).order_by(SeriesModel.id)).all()
        return [self._to_entity(model) for model in models]

    def save(self, series: Series) -> Series:
        """Sauvegarde une serie (insertion ou mise a jour)."""
        # Verifier si la serie existe deja (par ID ou tvdb_id)
        existing = None
        if series.id:
            existing = self._session.get(SeriesModel, int(series.id))
        elif series.tvdb_id:
            statement = select(SeriesModel).where(SeriesModel.tvdb_id == series.tvdb_id)
            existing = self._session.exec(statement).first()

        if existing:
            model = existing
            model.updated_at = datetime.utcnow()
        else:
            model = SeriesModel(title=series.title)
        self._apply(model, series)

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)
