"""Async Letterboxd client.

Resolves boxd.it short links and fetches profile avatars. Every
failure (timeout, transport error, non-success status) resolves to
None; callers treat it as "unavailable".
"""

import logging
from types import TracebackType

import httpx

from boxdstats.etl.extractors.letterboxd.scraper import LetterboxdScraper
from boxdstats.etl.types import ResolvedLink
from boxdstats.settings import settings

logger = logging.getLogger(__name__)


class LetterboxdClient:
    """HTTP client for Letterboxd short links and profile pages."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client with settings.

        Args:
            base_url: Site root override (profile pages live below it).
            timeout: Per-request timeout override in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._base_url = (base_url or settings.letterboxd.base_url).rstrip("/")
        self._timeout = timeout or settings.letterboxd.timeout
        self._transport = transport
        self._scraper = LetterboxdScraper()
        self._client: httpx.AsyncClient | None = None

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "LetterboxdClient":
        """Enter context and create HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers={"User-Agent": settings.letterboxd.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        """Return the open HTTP client.

        Raises:
            RuntimeError: If used outside the async context manager.
        """
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    # -------------------------------------------------------------------------
    # Short Links
    # -------------------------------------------------------------------------

    async def resolve_short_link(self, short_url: str) -> ResolvedLink | None:
        """Resolve a short link to its owner and item.

        Args:
            short_url: Short link, e.g. 'https://boxd.it/abc12'.

        Returns:
            Resolved link or None when unresolvable.
        """
        client = self._require_client()
        try:
            response = await client.head(short_url.strip())
        except httpx.HTTPError as e:
            logger.warning(f"Could not resolve {short_url}: {e}")
            return None

        if response.is_error:
            logger.debug(f"Short link {short_url} answered {response.status_code}")
            return None

        return self._scraper.parse_final_url(str(response.url))

    # -------------------------------------------------------------------------
    # Avatars
    # -------------------------------------------------------------------------

    async def fetch_avatar(self, username: str) -> str | None:
        """Fetch the avatar URL of a user.

        Args:
            username: Letterboxd username.

        Returns:
            Avatar URL or None.
        """
        client = self._require_client()
        url = f"{self._base_url}/{username}/"
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Could not fetch avatar for {username}: {e}")
            return None

        if not response.is_success:
            return None

        return self._scraper.parse_avatar(response.text)
