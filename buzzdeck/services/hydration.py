"""
Batched profile and post hydration.

Ids are split into fixed-size chunks that are fetched concurrently. A
failing chunk is logged and dropped; the others still contribute.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from buzzdeck.models.social import PostRecord, ProfileRecord
from buzzdeck.sources.base import CandidateSource

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 25

T = TypeVar("T")


def chunked(ids: Sequence[str], size: int) -> list[list[str]]:
    """Split ids into consecutive chunks of at most size."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


async def _hydrate(
    ids: Sequence[str],
    fetch: Callable[[list[str]], Awaitable[list[T]]],
    key: Callable[[T], str],
    chunk_size: int,
    kind: str,
) -> dict[str, T]:
    chunks = chunked(ids, chunk_size)
    results = await asyncio.gather(*(fetch(chunk) for chunk in chunks), return_exceptions=True)

    hydrated: dict[str, T] = {}
    for chunk, result in zip(chunks, results, strict=True):
        if isinstance(result, Exception):
            logger.warning(
                "HYDRATION_CHUNK_FAILED",
                extra={"kind": kind, "chunk_size": len(chunk), "error": str(result)},
            )
            continue
        if isinstance(result, BaseException):
            raise result
        for item in result:
            hydrated[key(item)] = item

    missing = len(set(ids) - hydrated.keys())
    if missing:
        logger.info("Hydrated %d %s, %d missing", len(hydrated), kind, missing)
    return hydrated


async def hydrate_profiles(
    source: CandidateSource,
    ids: Sequence[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> dict[str, ProfileRecord]:
    """
    Fetch profiles for ids, keyed by DID.

    Profiles from failed chunks are absent from the result.
    """
    return await _hydrate(ids, source.get_profiles, lambda p: p.did, chunk_size, "profiles")


async def hydrate_posts(
    source: CandidateSource,
    uris: Sequence[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> dict[str, PostRecord]:
    """
    Fetch posts for uris, keyed by URI.

    Posts from failed chunks are absent from the result.
    """
    return await _hydrate(uris, source.get_posts, lambda p: p.uri, chunk_size, "posts")
