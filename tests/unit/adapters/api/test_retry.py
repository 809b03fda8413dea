"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError et TransientAPIError conservent leur contexte
- with_retry ne relance que les erreurs passageres
- request_with_retry convertit 429, 502-504 et les erreurs de transport
- Les autres erreurs HTTP remontent sans nouvelle tentative
"""

import httpx
import pytest
import respx

from showsync.adapters.api.retry import (
    RateLimitError,
    TransientAPIError,
    request_with_retry,
    with_retry,
)

URL = "https://api.thetvdb.com/series/81189"


class TestRetryErrors:
    """Tests pour les exceptions du module."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        """RateLimitError stocke la valeur Retry-After."""
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_transient_error_stores_status_code(self) -> None:
        """TransientAPIError garde le code HTTP recu."""
        error = TransientAPIError("GET /series: HTTP 503", status_code=503)
        assert error.status_code == 503
        assert TransientAPIError("boom").status_code is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_transient_error_until_success(self) -> None:
        """with_retry relance sur TransientAPIError."""
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise TransientAPIError("gateway", status_code=502)
            return "ok"

        assert await flaky() == "ok"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        """Apres epuisement, l'exception d'origine remonte (pas de RetryError)."""
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def always_limited() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=1)

        with pytest.raises(RateLimitError):
            await always_limited()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_other_exceptions_are_not_retried(self) -> None:
        """with_retry ne relance pas les autres exceptions."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> str:
            nonlocal call_count
            call_count += 1
            raise KeyError("token")

        with pytest.raises(KeyError):
            await broken()
        assert call_count == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_response_on_success(self, respx_mock: respx.Router) -> None:
        """Reponse 200 : une seule requete."""
        route = respx_mock.get(URL).mock(return_value=httpx.Response(200, json={"data": {}}))

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL)

        assert response.json() == {"data": {}}
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_is_retried_then_succeeds(self, respx_mock: respx.Router) -> None:
        """429 puis 200 : deux requetes."""
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_exhaustion_keeps_retry_after(self, respx_mock: respx.Router) -> None:
        """429 persistant : RateLimitError avec le header Retry-After."""
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_gateway_error_is_retried(self, respx_mock: respx.Router) -> None:
        """503 puis 200 : la requete est relancee."""
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_becomes_transient(self, respx_mock: respx.Router) -> None:
        """Erreur de connexion persistante : TransientAPIError sans code HTTP."""
        route = respx_mock.get(URL).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(TransientAPIError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_are_not_retried(self, respx_mock: respx.Router) -> None:
        """404 : HTTPStatusError immediate."""
        route = respx_mock.get(URL).mock(return_value=httpx.Response(404))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.response.status_code == 404
        assert route.call_count == 1
