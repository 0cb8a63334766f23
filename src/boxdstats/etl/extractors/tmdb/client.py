"""Async TMDB API client.

Handles HTTP communication with The Movie Database API: credential
handling, bounded timeouts and error classification. Pacing is done by
the caller (see BatchRateLimiter); the client never retries.
"""

import logging
from types import TracebackType
from typing import Any

import httpx

from boxdstats.etl.types import TMDBMovieDetails, TMDBSearchResponse, TMDBSearchResult
from boxdstats.settings import settings

logger = logging.getLogger(__name__)


class TMDBClientError(Exception):
    """Base exception for TMDB client errors."""

    pass


class TMDBRateLimitError(TMDBClientError):
    """Raised when rate limit is exceeded."""

    pass


class TMDBNotFoundError(TMDBClientError):
    """Raised when resource is not found."""

    pass


class TMDBClient:
    """Async HTTP client for the TMDB API.

    A v4 read access token (JWT) is sent as a Bearer header, a v3 key as
    the `api_key` query parameter. Without a credential the client is
    disabled and callers must not issue requests.

    Attributes:
        is_enabled: True when a credential is configured.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize TMDB client with settings.

        Args:
            api_key: Credential override (default from TMDB_API_KEY).
            base_url: API base URL override.
            language: Response language override.
            timeout: Per-request timeout override in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        if api_key is None:
            api_key = settings.tmdb.api_key if settings.tmdb.is_configured else ""
        self._api_key = api_key.strip()
        self._base_url = (base_url or settings.tmdb.base_url).rstrip("/")
        self._language = language or settings.tmdb.language
        self._timeout = timeout or settings.tmdb.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_enabled(self) -> bool:
        """Check whether a credential is available."""
        return bool(self._api_key)

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "TMDBClient":
        """Enter context and create HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers=self._build_headers(),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client.

        Args:
            _exc_type: Exception type if raised.
            _exc_val: Exception value if raised.
            _exc_tb: Exception traceback if raised.
        """
        if self._client:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def _uses_bearer(self) -> bool:
        """Check whether the credential is a v4 read access token."""
        return self._api_key.count(".") == 2

    def _build_headers(self) -> dict[str, str]:
        """Build default request headers.

        Returns:
            Headers including Bearer authorization for v4 tokens.
        """
        headers = {"Accept": "application/json"}
        if self._api_key and self._uses_bearer():
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute GET request.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On transport errors, timeouts or API errors.
            TMDBNotFoundError: When resource not found.
            TMDBRateLimitError: When rate limit exceeded.
        """
        if self._client is None:
            msg = "Client not initialized. Use async context manager."
            raise TMDBClientError(msg)

        if not self.is_enabled:
            raise TMDBClientError("TMDB credential not configured")

        request_params: dict[str, Any] = {"language": self._language}
        if not self._uses_bearer():
            request_params["api_key"] = self._api_key
        if params:
            request_params.update(params)

        url = f"{self._base_url}{endpoint}"

        try:
            response = await self._client.get(url, params=request_params)
        except httpx.TimeoutException as e:
            logger.warning(f"Request timeout: {endpoint}")
            raise TMDBClientError(f"Timeout: {endpoint}") from e
        except httpx.HTTPError as e:
            raise TMDBClientError(f"Transport error on {endpoint}: {e}") from e

        return self._handle_response(response, endpoint)

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            endpoint: API endpoint (for logging).

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On API errors or malformed payloads.
            TMDBNotFoundError: When resource not found (404).
            TMDBRateLimitError: When rate limit exceeded (429).
        """
        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError as e:
                raise TMDBClientError(f"Malformed JSON: {endpoint}") from e
            if not isinstance(payload, dict):
                raise TMDBClientError(f"Unexpected payload type: {endpoint}")
            return payload

        if response.status_code == 404:
            raise TMDBNotFoundError(f"Not found: {endpoint}")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "10")
            logger.warning(f"Rate limited. Retry after {retry_after}s")
            raise TMDBRateLimitError(f"Rate limited: {endpoint}")

        raise TMDBClientError(f"TMDB API error {response.status_code}: {endpoint}")

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def search_movies(
        self,
        query: str,
        year: int | None = None,
    ) -> TMDBSearchResponse:
        """Search movies by title.

        Args:
            query: Search query string.
            year: Optional release year.

        Returns:
            Search results response.
        """
        params: dict[str, Any] = {"query": query}
        if year:
            params["year"] = year
        return await self._get("/search/movie", params)  # type: ignore[return-value]

    async def search_movie(
        self,
        title: str,
        year: int | None = None,
    ) -> TMDBSearchResult | None:
        """Return the best (first) search match for a title.

        Args:
            title: Movie title.
            year: Optional release year.

        Returns:
            First search result or None when nothing matches.
        """
        if not title:
            return None
        payload = await self.search_movies(title, year)
        results = payload.get("results") or []
        if not results or not isinstance(results[0], dict):
            return None
        return results[0]

    async def get_movie_details(self, movie_id: int) -> TMDBMovieDetails:
        """Get movie details with credits appended (single request).

        Args:
            movie_id: TMDB movie ID.

        Returns:
            Movie details with cast and crew.
        """
        params: dict[str, Any] = {"append_to_response": "credits"}
        return await self._get(f"/movie/{movie_id}", params)  # type: ignore[return-value]
