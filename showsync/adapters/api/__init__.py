"""
Clients API externes pour le rafraichissement des metadonnees.

- TVDBClient : fiches series et episodes TheTVDB (ISeriesInfoProvider)

Infrastructure partagee:
- RateLimitError / TransientAPIError : erreurs relancees automatiquement
- request_with_retry : requete avec backoff exponentiel (tenacity)
"""

from showsync.adapters.api.retry import (
    RateLimitError,
    TransientAPIError,
    request_with_retry,
    with_retry,
)
from showsync.adapters.api.tvdb_client import TVDBClient

__all__ = [
    "RateLimitError",
    "TransientAPIError",
    "TVDBClient",
    "request_with_retry",
    "with_retry",
]
