"""Unit tests for Letterboxd short-link resolution and profile parsing."""

import httpx
import pytest

from boxdstats.etl.extractors.letterboxd import LetterboxdClient, LetterboxdScraper

PROFILE_HTML = """
<html><head>
<meta property="og:image" content="https://a.ltrbxd.com/avatar/friend-0-220.jpg">
</head><body></body></html>
"""

DEFAULT_AVATAR_HTML = """
<html><head>
<meta property="og:image" content="https://s.ltrbxd.com/static/img/default-avatar.png">
</head><body>
<div class="profile-avatar"><img src="https://a.ltrbxd.com/avatar/real.jpg"></div>
</body></html>
"""


def _site(request: httpx.Request) -> httpx.Response:
    """Fake boxd.it redirector plus Letterboxd pages."""
    if request.url.host == "boxd.it":
        if request.url.path == "/abc12":
            return httpx.Response(
                301, headers={"Location": "https://letterboxd.test/friend/film/the-thing/"}
            )
        return httpx.Response(404)
    if request.url.path == "/friend/film/the-thing/":
        return httpx.Response(200)
    if request.url.path == "/friend/":
        return httpx.Response(200, text=PROFILE_HTML)
    return httpx.Response(404)


def _client(handler=_site) -> LetterboxdClient:
    return LetterboxdClient(
        base_url="https://letterboxd.test",
        transport=httpx.MockTransport(handler),
    )


# =========================================================================
# SCRAPER
# =========================================================================


class TestSlugToTitle:
    @staticmethod
    def test_capitalizes_words() -> None:
        assert LetterboxdScraper.slug_to_title("the-thing") == "The Thing"

    @staticmethod
    def test_keeps_inner_case_and_digits() -> None:
        assert LetterboxdScraper.slug_to_title("alien-3") == "Alien 3"

    @staticmethod
    def test_empty_slug() -> None:
        assert LetterboxdScraper.slug_to_title("") == ""


class TestParseFinalUrl:
    @staticmethod
    def test_film_activity() -> None:
        url = "https://letterboxd.com/friend/film/the-thing/"
        link = LetterboxdScraper.parse_final_url(url)
        assert link == {"username": "friend", "item_name": "The Thing", "final_url": url}

    @staticmethod
    def test_list_activity() -> None:
        link = LetterboxdScraper.parse_final_url("https://letterboxd.com/friend/list/best-of-1982/")
        assert link["item_name"] == "Best Of 1982"

    @staticmethod
    def test_profile_only() -> None:
        link = LetterboxdScraper.parse_final_url("https://letterboxd.com/friend/")
        assert link["username"] == "friend"
        assert link["item_name"] == ""

    @staticmethod
    def test_root_returns_none() -> None:
        assert LetterboxdScraper.parse_final_url("https://letterboxd.com/") is None


class TestParseAvatar:
    @staticmethod
    def test_og_image() -> None:
        assert LetterboxdScraper.parse_avatar(PROFILE_HTML) == (
            "https://a.ltrbxd.com/avatar/friend-0-220.jpg"
        )

    @staticmethod
    def test_default_avatar_falls_back_to_profile_image() -> None:
        assert LetterboxdScraper.parse_avatar(DEFAULT_AVATAR_HTML) == (
            "https://a.ltrbxd.com/avatar/real.jpg"
        )

    @staticmethod
    def test_default_avatar_kept_without_profile_image() -> None:
        html = '<meta property="og:image" content="https://s.ltrbxd.com/static/img/default-avatar.png">'
        assert LetterboxdScraper.parse_avatar(html) == (
            "https://s.ltrbxd.com/static/img/default-avatar.png"
        )

    @staticmethod
    def test_no_avatar() -> None:
        assert LetterboxdScraper.parse_avatar("<html><body>nothing</body></html>") is None


# =========================================================================
# CLIENT
# =========================================================================


class TestLetterboxdClient:
    @staticmethod
    @pytest.mark.asyncio
    async def test_resolve_follows_redirects() -> None:
        async with _client() as client:
            link = await client.resolve_short_link("https://boxd.it/abc12")

        assert link is not None
        assert link["username"] == "friend"
        assert link["item_name"] == "The Thing"
        assert link["final_url"] == "https://letterboxd.test/friend/film/the-thing/"

    @staticmethod
    @pytest.mark.asyncio
    async def test_resolve_error_status_returns_none() -> None:
        async with _client() as client:
            assert await client.resolve_short_link("https://boxd.it/missing") is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_resolve_transport_error_returns_none() -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("slow", request=request)

        async with _client(handler) as client:
            assert await client.resolve_short_link("https://boxd.it/abc12") is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_fetch_avatar() -> None:
        async with _client() as client:
            avatar = await client.fetch_avatar("friend")
        assert avatar == "https://a.ltrbxd.com/avatar/friend-0-220.jpg"

    @staticmethod
    @pytest.mark.asyncio
    async def test_fetch_avatar_unknown_user() -> None:
        async with _client() as client:
            assert await client.fetch_avatar("nobody") is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_outside_context_raises() -> None:
        with pytest.raises(RuntimeError):
            await _client().fetch_avatar("friend")
