"""Social interaction ranking.

Comments whose content holds a short link to another member's activity
are resolved to that member; members are ranked by number of such
comments. Avatars are fetched for the top of the ranking and posters
for the titles the top users' activities refer to.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from boxdstats.etl.aggregation.schemas import InteractedUser, InteractionComment
from boxdstats.etl.enrichment import PosterCache
from boxdstats.etl.extractors.csv import resolve_field
from boxdstats.etl.extractors.letterboxd import LetterboxdClient
from boxdstats.etl.types import ResolvedLink, Row
from boxdstats.etl.utils import BatchRateLimiter
from boxdstats.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class _Interactions:
    username: str
    comments: list[InteractionComment]


class SocialInteractionRanker:
    """Ranks the members a user interacted with through comments.

    Attributes:
        skipped_links: Links that could not be resolved during the last run.
    """

    def __init__(
        self,
        client: LetterboxdClient | None,
        posters: PosterCache,
        limiter: BatchRateLimiter | None = None,
        marker: str | None = None,
        image_base_url: str | None = None,
        avatar_top_n: int | None = None,
        poster_top_n: int | None = None,
    ) -> None:
        """Initialize ranker.

        Args:
            client: Open Letterboxd client, or None to skip link resolution.
            posters: Poster cache dedicated to the social ranking.
            limiter: Pacing for link and avatar requests.
            marker: Short-link marker (default from settings).
            image_base_url: Prefix turning poster paths into URLs.
            avatar_top_n: Users receiving an avatar.
            poster_top_n: Users whose referenced titles receive a poster.
        """
        self._client = client
        self._posters = posters
        self._limiter = limiter or BatchRateLimiter(
            settings.letterboxd.batch_size,
            settings.enrichment.batch_interval,
        )
        self._marker = marker or settings.letterboxd.short_link_marker
        self._image_base_url = (image_base_url or settings.tmdb.image_base_url).rstrip("/")
        self._avatar_top_n = settings.letterboxd.avatar_top_n if avatar_top_n is None else avatar_top_n
        self._poster_top_n = settings.letterboxd.poster_top_n if poster_top_n is None else poster_top_n
        self._poster_urls: dict[str, str | None] = {}
        self.skipped_links = 0

    # =========================================================================
    # RANKING
    # =========================================================================

    async def rank(self, comment_rows: Sequence[Row], owner_username: str = "") -> list[InteractedUser]:
        """Rank interacted members.

        Args:
            comment_rows: comments.csv rows.
            owner_username: Report owner, never counted (case-insensitive).

        Returns:
            Every interacted member, count desc then username asc.
        """
        self.skipped_links = 0
        link_rows = [
            (row, content)
            for row in comment_rows
            if (content := resolve_field(row, "content")) and self._marker in content
        ]
        if not link_rows or self._client is None:
            return []

        client = self._client
        resolved = await self._limiter.map(
            link_rows,
            lambda item: client.resolve_short_link(item[1]),
        )

        ranked = self._group(link_rows, resolved, owner_username.strip().lower())
        avatars = await self._fetch_avatars(ranked[: self._avatar_top_n])
        await self._attach_posters(ranked[: self._poster_top_n])

        return [
            InteractedUser(
                username=entry.username,
                interaction_count=len(entry.comments),
                comments=entry.comments,
                avatar_url=avatars.get(entry.username),
            )
            for entry in ranked
        ]

    def _group(
        self,
        link_rows: Sequence[tuple[Row, str]],
        resolved: Sequence[ResolvedLink | None],
        owner: str,
    ) -> list[_Interactions]:
        users: dict[str, _Interactions] = {}
        for (row, _), link in zip(link_rows, resolved, strict=True):
            if link is None:
                self.skipped_links += 1
                continue
            if owner and link["username"].strip().lower() == owner:
                continue

            entry = users.setdefault(link["username"], _Interactions(link["username"], []))
            entry.comments.append(
                InteractionComment(
                    date=resolve_field(row, "rated_date"),
                    text=resolve_field(row, "comment") or "",
                    movie=link["item_name"],
                    final_url=link["final_url"],
                )
            )

        if self.skipped_links:
            logger.debug("Skipped %d unresolvable short links", self.skipped_links)

        return sorted(users.values(), key=lambda entry: (-len(entry.comments), entry.username))

    # =========================================================================
    # AVATARS & POSTERS
    # =========================================================================

    async def _fetch_avatars(self, users: Sequence[_Interactions]) -> dict[str, str | None]:
        if self._client is None or not users:
            return {}
        client = self._client
        avatars = await self._limiter.map(users, lambda entry: client.fetch_avatar(entry.username))
        return {entry.username: avatar for entry, avatar in zip(users, avatars, strict=True)}

    async def _attach_posters(self, users: Sequence[_Interactions]) -> None:
        titles = [
            comment.movie
            for entry in users
            for comment in entry.comments
            if comment.movie and comment.movie not in self._poster_urls
        ]
        missing = list(dict.fromkeys(titles))
        if missing:
            paths = await self._posters.resolve_posters([(title, None) for title in missing])
            for title, path in zip(missing, paths, strict=True):
                self._poster_urls[title] = f"{self._image_base_url}{path}" if path else None

        for entry in users:
            for comment in entry.comments:
                if comment.movie:
                    comment.poster_url = self._poster_urls.get(comment.movie)
