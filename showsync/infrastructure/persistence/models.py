"""
Modeles SQLModel pour la base de donnees Showsync.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- series: Series TV avec metadonnees TVDB
- seasons: Saisons (drapeau "ignored" herite par les nouveaux episodes)
- episodes: Episodes de series, avec lien optionnel vers un fichier

Les champs JSON (*_json) permettent de stocker des listes (illustrations)
de maniere serialisee dans SQLite.
Les colonnes datetime sont naives (sans fuseau), comme les valeurs du domaine.
"""

from __future__ import annotations

import json
from datetime import date, datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field, Index, SQLModel


class SeriesModel(SQLModel, table=True):
    """
    Modele representant une serie TV dans la base de donnees.

    Les metadonnees proviennent de TVDB.
    """

    __tablename__ = "series"

    id: int | None = Field(default=None, primary_key=True)
    tvdb_id: int | None = Field(default=None, index=True, unique=True)
    title: str = Field(index=True)
    clean_title: str = Field(default="", index=True)
    air_time: str | None = None  # ex: "21:00"
    overview: str | None = None
    status: str = Field(default="unknown")
    runtime: int = Field(default=0)  # minutes
    images_json: str | None = None  # JSON: [{"cover_type": "poster", "url": "..."}]
    network: str | None = None
    first_aired: date | None = None
    last_info_sync: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=False), index=True)
    )
    created_at: datetime | None = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False))
    )
    updated_at: datetime | None = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False))
    )

    @property
    def images(self) -> list[dict[str, str]]:
        """Retourne les illustrations deserialisees."""
        if self.images_json:
            return json.loads(self.images_json)
        return []

    @images.setter
    def images(self, value: list[dict[str, str]]) -> None:
        """Serialise les illustrations en JSON."""
        self.images_json = json.dumps(value) if value else None


class SeasonModel(SQLModel, table=True):
    """
    Modele representant une saison de serie TV.

    Une seule ligne par couple (series_id, season_number).
    """

    __tablename__ = "seasons"
    __table_args__ = (
        Index("ix_seasons_series_season", "series_id", "season_number", unique=True),
    )

    id: int | None = Field(default=None, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True)
    season_number: int
    ignored: bool = Field(default=False)


class EpisodeModel(SQLModel, table=True):
    """
    Modele representant un episode de serie TV.

    Lie a une serie via series_id (foreign key).
    episode_file_id vaut 0 quand aucun fichier n'est lie.
    """

    __tablename__ = "episodes"
    __table_args__ = (
        Index("ix_episodes_series_season_episode", "series_id", "season_number", "episode_number"),
    )

    id: int | None = Field(default=None, primary_key=True)
    series_id: int = Field(foreign_key="series.id", index=True)
    tvdb_episode_id: int | None = Field(default=None, index=True)
    season_number: int
    episode_number: int
    title: str = ""
    overview: str | None = None
    air_date: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=False))
    )
    episode_file_id: int = Field(default=0)
    ignored: bool = Field(default=False)
    created_at: datetime | None = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False))
    )
    updated_at: datetime | None = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False))
    )
