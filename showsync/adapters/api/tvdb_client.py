"""
Client TVDB API v3 pour le rafraichissement des series TV.

Implemente ISeriesInfoProvider : recupere la fiche d'une serie et la liste
complete de ses episodes. Gere l'authentification JWT, la pagination et
le rate limiting automatiquement.

Pas de cache : un rafraichissement doit toujours lire la fiche a jour.

Reference API: https://api.thetvdb.com/swagger
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Optional

import httpx
from loguru import logger

from showsync.adapters.api.retry import request_with_retry
from showsync.core.entities.media import MediaCover, MediaCoverType, SeriesStatus
from showsync.core.ports.api_clients import (
    EpisodeInfo,
    ISeriesInfoProvider,
    SeriesInfo,
    SeriesInfoNotFoundError,
)

ARTWORK_BASE_URL = "https://artworks.thetvdb.com/banners/"

_AIR_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M")


def parse_air_time(value: Optional[str]) -> Optional[str]:
    """
    Normalise l'heure de diffusion TVDB au format HH:MM.

    Ex: "9:00 PM" -> "21:00", "21:00" -> "21:00", "" -> None
    """
    if not value:
        return None
    raw = value.strip().upper()
    for fmt in _AIR_TIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt).strftime("%H:%M")
        except ValueError:
            continue
    logger.debug(f"Heure de diffusion TVDB non reconnue : {value!r}")
    return None


def parse_first_aired(value: Optional[str]) -> Optional[date]:
    """Convertit une date TVDB (YYYY-MM-DD) ; None si vide ou invalide."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(f"Date de diffusion TVDB invalide : {value!r}")
        return None


def combine_air_date(first_aired: Optional[date], air_time: Optional[str]) -> Optional[datetime]:
    """Combine la date d'un episode et l'heure de diffusion de la serie (minuit par defaut)."""
    if first_aired is None:
        return None
    at = time.fromisoformat(air_time) if air_time else time(0, 0)
    return datetime.combine(first_aired, at)


def _artwork_url(path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    path = path.lstrip("/")
    if path.startswith("banners/"):
        path = path[len("banners/"):]
    return f"{ARTWORK_BASE_URL}{path}"


def _parse_runtime(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _parse_status(value: Optional[str]) -> SeriesStatus:
    try:
        return SeriesStatus((value or "").strip().lower())
    except ValueError:
        return SeriesStatus.UNKNOWN


class TVDBClient(ISeriesInfoProvider):
    """
    Client TVDB pour la recuperation des fiches series et episodes.

    Utilise l'API TVDB v3 avec authentification JWT. Le token est obtenu
    automatiquement a la premiere requete et rafraichi avant expiration.

    Attributes:
        BASE_URL: URL de base de l'API TVDB v3

    Example:
        client = TVDBClient(api_key="your-api-key")
        series_info, episodes = await client.get_series_info(81189)
        await client.close()
    """

    BASE_URL = "https://api.thetvdb.com"

    def __init__(
        self,
        api_key: Optional[str],
        language: str = "en",
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client TVDB.

        Args:
            api_key: Cle API TVDB (Project API Key depuis le compte TVDB)
            language: Code langue ISO 639-1 des fiches demandees
            timeout: Timeout des requetes HTTP en secondes
            max_attempts: Nombre maximum de tentatives par requete
        """
        self._api_key = api_key
        self._language = language
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._token: Optional[str] = None
        self._token_expiry: Optional[datetime] = None
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, cree s'il n'existe pas.

        Utilise un client unique pour beneficier du connection pooling.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(self._timeout, connect=10.0),
            )
        return self._client

    async def _ensure_token(self) -> str:
        """
        S'assure qu'un token JWT valide est disponible.

        Le token TVDB est valide ~1 semaine, on le rafraichit 1 jour avant.

        Returns:
            Token JWT valide
        """
        if self._token and self._token_expiry and datetime.now() < self._token_expiry:
            return self._token

        if not self._api_key:
            raise RuntimeError("TVDB API key not configured (SHOWSYNC_TVDB_API_KEY)")

        client = await self._get_client()
        response = await request_with_retry(
            client,
            "POST",
            "/login",
            max_attempts=self._max_attempts,
            json={"apikey": self._api_key},
        )
        self._token = response.json()["token"]
        self._token_expiry = datetime.now() + timedelta(days=6)
        return self._token

    def _get_auth_headers(self) -> dict[str, str]:
        """Retourne les headers d'authentification et de langue."""
        if not self._token:
            raise RuntimeError("Token not available. Call _ensure_token() first.")
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept-Language": self._language,
        }

    async def _get(self, url: str, **kwargs) -> dict:
        client = await self._get_client()
        response = await request_with_retry(
            client,
            "GET",
            url,
            max_attempts=self._max_attempts,
            headers=self._get_auth_headers(),
            **kwargs,
        )
        return response.json()

    async def get_series_info(
        self, tvdb_id: int
    ) -> tuple[SeriesInfo, list[EpisodeInfo]]:
        """
        Recupere la fiche d'une serie et tous ses episodes.

        Args:
            tvdb_id: ID TVDB de la serie

        Returns:
            Tuple (SeriesInfo, liste d'EpisodeInfo dans l'ordre TVDB)

        Raises:
            SeriesInfoNotFoundError: Si TVDB repond 404
            httpx.HTTPError: Pour les autres erreurs HTTP ou de transport
        """
        await self._ensure_token()

        try:
            payload = await self._get(f"/series/{tvdb_id}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise SeriesInfoNotFoundError(tvdb_id) from e
            raise

        series_info = self._to_series_info(payload["data"])
        raw_episodes = await self._fetch_all_episodes(tvdb_id)

        episodes = []
        for item in raw_episodes:
            episode = self._to_episode_info(item, series_info.air_time)
            if episode is not None:
                episodes.append(episode)

        logger.debug(
            f"TVDB {tvdb_id} : {series_info.title}, {len(episodes)} episode(s)"
        )
        return series_info, episodes

    async def _fetch_all_episodes(self, tvdb_id: int) -> list[dict]:
        """
        Recupere les episodes d'une serie, page par page.

        Une serie sans episode repond 404 : traitee comme une liste vide.
        """
        items: list[dict] = []
        page: Optional[int] = 1
        while page is not None:
            try:
                payload = await self._get(
                    f"/series/{tvdb_id}/episodes", params={"page": str(page)}
                )
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404 and page == 1:
                    return []
                raise
            items.extend(payload.get("data") or [])
            page = (payload.get("links") or {}).get("next")
        return items

    def _to_series_info(self, data: dict) -> SeriesInfo:
        """Convertit la fiche serie brute en SeriesInfo."""
        images = tuple(
            MediaCover(cover_type=cover_type, url=_artwork_url(data[cover_type.value]))
            for cover_type in MediaCoverType
            if data.get(cover_type.value)
        )
        return SeriesInfo(
            tvdb_id=int(data["id"]),
            title=data.get("seriesName") or "",
            air_time=parse_air_time(data.get("airsTime")),
            overview=data.get("overview"),
            status=_parse_status(data.get("status")),
            runtime=_parse_runtime(data.get("runtime")),
            images=images,
            network=data.get("network") or None,
            first_aired=parse_first_aired(data.get("firstAired")),
        )

    def _to_episode_info(self, item: dict, air_time: Optional[str]) -> Optional[EpisodeInfo]:
        """Convertit une fiche episode brute ; None si la numerotation manque."""
        season = item.get("airedSeason")
        number = item.get("airedEpisodeNumber")
        if season is None or number is None:
            logger.warning(f"Episode TVDB {item.get('id')} sans numerotation, ignore")
            return None

        return EpisodeInfo(
            tvdb_episode_id=item.get("id"),
            season_number=int(season),
            episode_number=int(number),
            title=item.get("episodeName") or "",
            overview=item.get("overview"),
            air_date=combine_air_date(parse_first_aired(item.get("firstAired")), air_time),
        )

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
