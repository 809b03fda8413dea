"""
Implementation SQLModel du repository Season.
"""

from sqlmodel import Session, select

from showsync.core.entities.media import Season
from showsync.core.ports.repositories import ISeasonRepository
from showsync.infrastructure.persistence.models import SeasonModel


class SQLModelSeasonRepository(ISeasonRepository):
    """Repository SQLModel pour les saisons de series."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: SeasonModel) -> Season:
        return Season(
            id=str(model.id) if model.id else None,
            series_id=str(model.series_id),
            season_number=model.season_number,
            ignored=model.ignored,
        )

    def get_by_series(self, series_id: str) -> list[Season]:
        """Recupere les saisons d'une serie, par numero croissant."""
        statement = (
            select(SeasonModel)
            .where(SeasonModel.series_id == int(series_id))
            .order_by(SeasonModel.season_number)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def save(self, season: Season) -> Season:
        """Sauvegarde une saison ; la ligne est identifiee par (serie, numero)."""
        statement = select(SeasonModel).where(
            SeasonModel.series_id == int(season.series_id),
            SeasonModel.season_number == season.season_number,
        )
        model = self._session.exec(statement).first()
        if model is None:
            model = SeasonModel(
                series_id=int(season.series_id),
                season_number=season.season_number,
            )
        model.ignored = season.ignored

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)
