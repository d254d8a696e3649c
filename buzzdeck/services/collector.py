"""
Candidate collection.

Walks an actor's likes to gather the posts and authors a deck is built
from. Fetch failures end collection early with whatever was gathered;
they never propagate to the caller.
"""

import logging
from dataclasses import dataclass

from buzzdeck.config import GameConfig
from buzzdeck.models.social import CollectedCandidates
from buzzdeck.sources.base import CandidateSource, SourceFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollectionTargets:
    """
    Stopping rules for likes pagination.

    Attributes:
        author_count: Distinct authors wanted
        post_count: Distinct liked posts wanted
        page_size: Records requested per likes page
        max_pages: Hard ceiling on likes pages read
    """

    author_count: int
    post_count: int
    page_size: int = 100
    max_pages: int = 10

    @classmethod
    def from_config(cls, config: GameConfig) -> "CollectionTargets":
        return cls(
            author_count=config.user_pool_size,
            post_count=config.post_pool_size,
            page_size=config.likes_page_size,
            max_pages=config.max_like_pages,
        )


async def collect(
    source: CandidateSource,
    actor_id: str,
    targets: CollectionTargets,
) -> CollectedCandidates:
    """
    Gather liked post URIs and distinct author DIDs for an actor.

    Workflow:
    1. Page through likes until either target is met, the page ceiling is
       hit, or a page comes back empty or without a cursor
    2. If authors are still short, top up from one page of follows

    Args:
        source: Social-graph reader
        actor_id: DID or handle of the player
        targets: Stopping rules

    Returns:
        CollectedCandidates in arrival order. Post refs are capped at the
        post target.
    """
    post_refs: list[str] = []
    seen_posts: set[str] = set()
    author_ids: list[str] = []
    seen_authors: set[str] = {actor_id}

    cursor: str | None = None
    pages_read = 0

    while (
        len(author_ids) < targets.author_count
        and len(post_refs) < targets.post_count
        and pages_read < targets.max_pages
    ):
        pages_read += 1
        try:
            page = await source.get_actor_likes(actor_id, targets.page_size, cursor)
        except SourceFetchError as e:
            logger.warning(
                "LIKES_PAGE_FAILED",
                extra={"actor": actor_id, "page": pages_read, "error": str(e)},
            )
            break

        if not page.post_refs:
            break

        for ref in page.post_refs:
            if ref.uri not in seen_posts and len(post_refs) < targets.post_count:
                seen_posts.add(ref.uri)
                post_refs.append(ref.uri)
            if ref.author_did not in seen_authors:
                seen_authors.add(ref.author_did)
                author_ids.append(ref.author_did)

        cursor = page.cursor
        if not cursor:
            break

    if len(author_ids) < targets.author_count:
        await _supplement_from_follows(source, actor_id, targets, author_ids, seen_authors)

    logger.info(
        "Collected %d posts and %d authors for %s in %d pages",
        len(post_refs),
        len(author_ids),
        actor_id,
        pages_read,
    )
    return CollectedCandidates(post_refs=post_refs, author_ids=author_ids)


async def _supplement_from_follows(
    source: CandidateSource,
    actor_id: str,
    targets: CollectionTargets,
    author_ids: list[str],
    seen_authors: set[str],
) -> None:
    """Append unseen followed accounts to author_ids until the author target."""
    try:
        follows = await source.get_follows(actor_id, targets.page_size)
    except SourceFetchError as e:
        logger.warning("FOLLOWS_FETCH_FAILED", extra={"actor": actor_id, "error": str(e)})
        return

    for did in follows:
        if len(author_ids) >= targets.author_count:
            break
        if did not in seen_authors:
            seen_authors.add(did)
            author_ids.append(did)
