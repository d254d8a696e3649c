"""
Candidate source contract.

The deck pipeline reads the social graph only through this protocol, so a
live AppView client and an in-memory fake are interchangeable.
"""

from typing import Protocol

from buzzdeck.models.social import LikesPage, PostRecord, ProfileRecord


class SourceFetchError(Exception):
    """Raised when a candidate source request fails."""

    pass


class CandidateSource(Protocol):
    """Read access to the social graph needed for deck construction."""

    async def get_actor_likes(
        self, actor: str, limit: int, cursor: str | None = None
    ) -> LikesPage: ...

    async def get_follows(self, actor: str, limit: int) -> list[str]: ...

    async def get_profiles(self, ids: list[str]) -> list[ProfileRecord]: ...

    async def get_posts(self, uris: list[str]) -> list[PostRecord]: ...
