from buzzdeck.sources.base import CandidateSource, SourceFetchError
from buzzdeck.sources.bluesky import BlueskySource

__all__ = [
    "BlueskySource",
    "CandidateSource",
    "SourceFetchError",
]
