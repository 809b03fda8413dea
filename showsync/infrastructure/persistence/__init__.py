"""
Module de persistance SQLite pour Showsync.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports repository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.
"""

from showsync.infrastructure.persistence.database import get_engine, get_session, init_db
from showsync.infrastructure.persistence.models import EpisodeModel, SeasonModel, SeriesModel

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "SeriesModel",
    "SeasonModel",
    "EpisodeModel",
]
