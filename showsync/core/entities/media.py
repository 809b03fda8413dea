"""
Media metadata entities.

Entities representing TV shows, their seasons and episodes as stored
in the local library. Descriptive fields come from TVDB; file links and
"ignored" flags are owned locally.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class SeriesStatus(str, Enum):
    """Statut de diffusion d'une serie."""

    CONTINUING = "continuing"
    ENDED = "ended"
    UPCOMING = "upcoming"
    UNKNOWN = "unknown"


class MediaCoverType(str, Enum):
    """Type d'illustration associee a une serie."""

    POSTER = "poster"
    BANNER = "banner"
    FANART = "fanart"


@dataclass(frozen=True)
class MediaCover:
    """Illustration d'une serie (URL absolue)."""

    cover_type: MediaCoverType
    url: str


@dataclass
class Series:
    """
    TV series metadata from TVDB.

    Attributes:
        id: Internal database ID
        tvdb_id: TheTVDB ID, key used to fetch the remote record
        title: Title as published by TVDB
        clean_title: Normalized form of title, used for lookups
        air_time: Local airing time (ex: "21:00")
        overview: Series description
        status: Airing status
        runtime: Episode runtime in minutes
        images: Artwork (poster, banner, fanart)
        network: Broadcasting network
        first_aired: First air date
        last_info_sync: Time of the last successful metadata refresh
    """

    id: Optional[str] = None
    tvdb_id: Optional[int] = None
    title: str = ""
    clean_title: str = ""
    air_time: Optional[str] = None
    overview: Optional[str] = None
    status: SeriesStatus = SeriesStatus.UNKNOWN
    runtime: int = 0
    images: tuple[MediaCover, ...] = ()
    network: Optional[str] = None
    first_aired: Optional[date] = None
    last_info_sync: Optional[datetime] = None


@dataclass
class Season:
    """
    Season of a TV series.

    Attributes:
        id: Internal database ID
        series_id: Reference to parent Series
        season_number: Season number (0 for specials)
        ignored: Episodes discovered in this season are ignored by default
    """

    id: Optional[str] = None
    series_id: Optional[str] = None
    season_number: int = 0
    ignored: bool = False


@dataclass
class Episode:
    """
    Individual episode of a TV series.

    Attributes:
        id: Internal database ID
        series_id: Reference to parent Series
        tvdb_episode_id: TheTVDB episode ID (absent for old local-only rows)
        season_number: Season number (0 for specials)
        episode_number: Episode number within season
        title: Episode title
        overview: Episode description
        air_date: Original air date and time
        episode_file_id: Linked media file ID (0 when unlinked)
        ignored: Episode hidden from monitoring
    """

    id: Optional[str] = None
    series_id: Optional[str] = None
    tvdb_episode_id: Optional[int] = None
    season_number: int = 0
    episode_number: int = 0
    title: str = ""
    overview: Optional[str] = None
    air_date: Optional[datetime] = None
    episode_file_id: int = 0
    ignored: bool = False

    @property
    def has_file(self) -> bool:
        """Indique si un fichier media est lie a l'episode."""
        return self.episode_file_id > 0

    @property
    def label(self) -> str:
        """Libelle court SxxEyy pour les logs."""
        return f"S{self.season_number:02d}E{self.episode_number:02d}"
