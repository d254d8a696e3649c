"""
Bluesky AppView candidate source.

Reads likes, follows, profiles and posts from the public XRPC API.
Only the fields the card synthesizer needs are parsed; everything else in
the responses is ignored.

Note: The public AppView needs no session. Pagination and batching limits
are enforced by the caller, this client issues exactly one request per call.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from buzzdeck.config import settings
from buzzdeck.models.social import LikesPage, PostRecord, PostRef, ProfileRecord
from buzzdeck.sources.base import SourceFetchError

logger = logging.getLogger(__name__)

USER_AGENT = "BuzzDeck/0.1"

EMBED_RECORD_WITH_MEDIA = "app.bsky.embed.recordWithMedia#view"

T = TypeVar("T")


class BlueskySource:
    """CandidateSource backed by the AppView XRPC endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            base_url: AppView root, defaults to the configured public AppView
            client: Optional httpx client for connection reuse
            timeout: Request timeout in seconds when no client is given
        """
        self.base_url = (base_url or settings.appview_url).rstrip("/")
        self._client = client
        self._timeout = timeout if timeout is not None else settings.http_timeout

    async def _get_json(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Call one XRPC query method.

        Raises:
            SourceFetchError: If the request fails, returns an error status
                or the body is not a JSON object
        """
        url = f"{self.base_url}/xrpc/{method}"
        try:
            if self._client:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(
                    timeout=self._timeout, headers={"User-Agent": USER_AGENT}
                ) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceFetchError(f"{method} failed: HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise SourceFetchError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise SourceFetchError(f"{method} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise SourceFetchError(f"{method} returned {type(data).__name__}, expected an object")
        return data

    async def get_actor_likes(
        self, actor: str, limit: int, cursor: str | None = None
    ) -> LikesPage:
        params: dict[str, Any] = {"actor": actor, "limit": limit}
        if cursor:
            params["cursor"] = cursor

        data = await self._get_json("app.bsky.feed.getActorLikes", params)
        return parse_likes_page(data)

    async def get_follows(self, actor: str, limit: int) -> list[str]:
        data = await self._get_json("app.bsky.graph.getFollows", {"actor": actor, "limit": limit})
        return [
            item["did"]
            for item in _items(data, "follows")
            if isinstance(item.get("did"), str) and item["did"]
        ]

    async def get_profiles(self, ids: list[str]) -> list[ProfileRecord]:
        if not ids:
            return []
        data = await self._get_json("app.bsky.actor.getProfiles", {"actors": ids})
        return _parse_each(_items(data, "profiles"), parse_profile, "profile")

    async def get_posts(self, uris: list[str]) -> list[PostRecord]:
        if not uris:
            return []
        data = await self._get_json("app.bsky.feed.getPosts", {"uris": uris})
        return _parse_each(_items(data, "posts"), parse_post, "post")


def _items(data: dict[str, Any], field: str) -> list[dict[str, Any]]:
    """Return the object entries of a list field, ignoring anything else."""
    value = data.get(field)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _parse_each(
    items: list[dict[str, Any]], parse: Callable[[dict[str, Any]], T], kind: str
) -> list[T]:
    """Parse records one at a time, skipping the malformed ones."""
    parsed: list[T] = []
    for item in items:
        try:
            parsed.append(parse(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "MALFORMED_RECORD_SKIPPED",
                extra={"kind": kind, "error": repr(e)},
            )
    return parsed


def _required_str(data: dict[str, Any], field: str) -> str:
    value = data[field]
    if not isinstance(value, str) or not value:
        raise ValueError(f"{field} must be a non-empty string, got {value!r}")
    return value


def parse_likes_page(data: dict[str, Any]) -> LikesPage:
    """Extract post references and the next cursor from a getActorLikes response."""
    refs: list[PostRef] = []
    for item in _items(data, "feed"):
        post = item.get("post")
        if not isinstance(post, dict):
            continue
        uri = post.get("uri")
        author = post.get("author")
        author_did = author.get("did") if isinstance(author, dict) else None
        if isinstance(uri, str) and uri and isinstance(author_did, str) and author_did:
            refs.append(PostRef(uri=uri, author_did=author_did))

    cursor = data.get("cursor")
    return LikesPage(post_refs=refs, cursor=cursor if isinstance(cursor, str) and cursor else None)


def parse_profile(data: dict[str, Any]) -> ProfileRecord:
    """Convert a profileViewDetailed into a ProfileRecord."""
    return ProfileRecord(
        did=_required_str(data, "did"),
        handle=data.get("handle", ""),
        display_name=data.get("displayName") or None,
        avatar_url=data.get("avatar"),
        description=data.get("description"),
        followers_count=max(0, int(data.get("followersCount") or 0)),
        follows_count=max(0, int(data.get("followsCount") or 0)),
    )


def parse_post(data: dict[str, Any]) -> PostRecord:
    """Convert a postView into a PostRecord."""
    author = data.get("author") or {}
    record = data.get("record") or {}
    text = record.get("text")

    return PostRecord(
        uri=_required_str(data, "uri"),
        author_did=author.get("did", ""),
        author_handle=author.get("handle", ""),
        author_display_name=author.get("displayName") or None,
        like_count=max(0, int(data.get("likeCount") or 0)),
        text=text if isinstance(text, str) else "",
        embed_images=extract_embed_images(data.get("embed")),
    )


def extract_embed_images(embed: dict[str, Any] | None) -> tuple[str, ...]:
    """
    Collect full-size image URLs from a post embed.

    Handles direct image embeds and quote posts carrying media.
    """
    if not embed:
        return ()

    images = embed.get("images")
    if not images and embed.get("$type") == EMBED_RECORD_WITH_MEDIA:
        images = (embed.get("media") or {}).get("images")

    return tuple(img["fullsize"] for img in images or [] if img.get("fullsize"))
