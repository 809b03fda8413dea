"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- Series: TV series metadata from TVDB
- Season: Season of a series, carrying the user "ignored" flag
- Episode: Individual episode of a series
- MediaCover / MediaCoverType: Artwork attached to a series
- SeriesStatus: Airing status of a series
"""

from showsync.core.entities.media import (
    Episode,
    MediaCover,
    MediaCoverType,
    Season,
    Series,
    SeriesStatus,
)

__all__ = [
    "Episode",
    "MediaCover",
    "MediaCoverType",
    "Season",
    "Series",
    "SeriesStatus",
]
