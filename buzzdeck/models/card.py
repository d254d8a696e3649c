from dataclasses import dataclass
from enum import Enum


class CardType(str, Enum):
    """Discriminator for the card variant."""

    USER = "user"
    POST = "post"


@dataclass(frozen=True, slots=True)
class UserCard:
    """
    A card synthesized from an account profile.

    Stays on the field once played and scores every end phase.

    Attributes:
        id: Account DID (stable source identity)
        instance_id: Unique per deck build, distinguishes duplicate sources
        power: Buzz contributed per end phase while on the field (>= 1)
        cost: PDS needed to play (1-10)
        handle: Account handle
        display_name: Profile display name
        avatar_url: Profile avatar image
        description: Profile bio text
    """

    id: str
    instance_id: str
    power: int
    cost: int
    handle: str
    display_name: str | None = None
    avatar_url: str | None = None
    description: str | None = None

    @property
    def type(self) -> CardType:
        return CardType.USER


@dataclass(frozen=True, slots=True)
class PostCard:
    """
    A card synthesized from a liked post.

    Resolves instantly when played and never occupies the field.

    Attributes:
        id: Post URI (stable source identity)
        instance_id: Unique per deck build, distinguishes duplicate sources
        power: Buzz gained when played, before multipliers (>= 10)
        cost: PDS needed to play (>= 1)
        handle: Author handle
        display_name: Author display name
        text: Post body
        image_url: First embedded image, if any
        like_count: Likes at synthesis time
        played_score: Buzz this card produced when played, None until then
    """

    id: str
    instance_id: str
    power: int
    cost: int
    handle: str
    display_name: str | None = None
    text: str = ""
    image_url: str | None = None
    like_count: int = 0
    played_score: int | None = None

    @property
    def type(self) -> CardType:
        return CardType.POST


Card = UserCard | PostCard
