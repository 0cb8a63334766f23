"""Letterboxd page and URL parsing."""

import logging
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from boxdstats.etl.types import ResolvedLink

logger = logging.getLogger(__name__)

# Marker present in the URL of the placeholder avatar
DEFAULT_AVATAR_MARKER = "default-avatar"


class LetterboxdScraper:
    """Extracts social data from Letterboxd URLs and profile pages."""

    # =========================================================================
    # URL PARSING
    # =========================================================================

    @staticmethod
    def slug_to_title(slug: str) -> str:
        """Convert an item slug into a display title.

        Args:
            slug: Hyphenated slug, e.g. 'the-thing'.

        Returns:
            Words capitalized and joined with spaces ('The Thing').
        """
        return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)

    @classmethod
    def parse_final_url(cls, final_url: str) -> ResolvedLink | None:
        """Split a resolved activity URL into owner and item.

        Paths look like /<username>/film/<slug>/ or /<username>/list/<slug>/.

        Args:
            final_url: URL reached after following redirects.

        Returns:
            Resolved link, or None when the path carries no username.
        """
        parts = [part for part in urlparse(final_url).path.split("/") if part]
        if not parts:
            return None

        slug = parts[2] if len(parts) > 2 else ""
        return ResolvedLink(
            username=parts[0],
            item_name=cls.slug_to_title(slug),
            final_url=final_url,
        )

    # =========================================================================
    # PROFILE PAGE PARSING
    # =========================================================================

    @staticmethod
    def parse_avatar(html: str) -> str | None:
        """Extract the avatar URL from a profile page.

        The og:image meta tag is preferred unless it points at the
        default placeholder; the profile avatar image is the fallback.
        The placeholder is kept when the page has no avatar image.

        Args:
            html: Profile page HTML.

        Returns:
            Avatar URL or None.
        """
        soup = BeautifulSoup(html, "html.parser")

        meta = soup.select_one("meta[property='og:image']")
        content = meta.get("content") if meta else None
        avatar = content if isinstance(content, str) and content else None
        if avatar and DEFAULT_AVATAR_MARKER not in avatar:
            return avatar

        for selector in (".profile-avatar img", ".avatar img"):
            img = soup.select_one(selector)
            src = img.get("src") if img else None
            if isinstance(src, str) and src:
                return src

        return avatar
