from buzzdeck.models.card import Card, CardType, PostCard, UserCard
from buzzdeck.models.game_state import (
    GameState,
    Lane,
    MvpCards,
    Phase,
    Player,
    card_from_dict,
    card_to_dict,
    game_state_from_dict,
    game_state_to_dict,
)
from buzzdeck.models.social import (
    CollectedCandidates,
    LikesPage,
    PostRecord,
    PostRef,
    ProfileRecord,
)

__all__ = [
    "Card",
    "CardType",
    "CollectedCandidates",
    "GameState",
    "Lane",
    "LikesPage",
    "MvpCards",
    "Phase",
    "Player",
    "PostCard",
    "PostRecord",
    "PostRef",
    "ProfileRecord",
    "UserCard",
    "card_from_dict",
    "card_to_dict",
    "game_state_from_dict",
    "game_state_to_dict",
]
