from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ProfileRecord:
    """
    A hydrated account profile.

    Attributes:
        did: Account DID
        handle: Account handle
        display_name: Profile display name
        avatar_url: Profile avatar image
        description: Profile bio text
        followers_count: Accounts following this one
        follows_count: Accounts this one follows
    """

    did: str
    handle: str
    display_name: str | None = None
    avatar_url: str | None = None
    description: str | None = None
    followers_count: int = 0
    follows_count: int = 0


@dataclass(frozen=True, slots=True)
class PostRecord:
    """
    A hydrated post.

    Attributes:
        uri: Post URI
        author_did: Author DID
        author_handle: Author handle
        author_display_name: Author display name
        like_count: Likes on the post
        text: Post body
        embed_images: Full-size image URLs embedded in the post
    """

    uri: str
    author_did: str
    author_handle: str
    author_display_name: str | None = None
    like_count: int = 0
    text: str = ""
    embed_images: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PostRef:
    """A liked post as seen on a likes page: its URI and author."""

    uri: str
    author_did: str


@dataclass
class LikesPage:
    """One page of an actor's likes."""

    post_refs: list[PostRef] = field(default_factory=list)
    cursor: str | None = None


@dataclass
class CollectedCandidates:
    """Post and author ids gathered for deck construction, in arrival order."""

    post_refs: list[str] = field(default_factory=list)
    author_ids: list[str] = field(default_factory=list)
