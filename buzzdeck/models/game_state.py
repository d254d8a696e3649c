"""
Game state records and their snapshot form.

The GameState is the complete picture of a game in progress. It is owned
and mutated by the engine; the dict form produced here is what the HTTP
controller serves and what a snapshot can be rebuilt from.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from buzzdeck.models.card import Card, CardType, PostCard, UserCard


class Phase(str, Enum):
    """Turn phases, always entered in this order."""

    DRAW = "draw"
    MAIN = "main"
    END = "end"


@dataclass(frozen=True, slots=True)
class Lane:
    """A field slot holding one played user card."""

    id: str
    card: UserCard
    turn_created: int


@dataclass
class Player:
    """Card zones and resources for the single player."""

    deck: list[Card] = field(default_factory=list)
    hand: list[Card] = field(default_factory=list)
    discard: list[Card] = field(default_factory=list)
    field: list[Lane] = field(default_factory=list)
    pds_capacity: int = 0
    pds_current: int = 0
    buzz_points: int = 0

    def all_instance_ids(self) -> list[str]:
        """Instance ids across every zone, field lanes included."""
        ids = [card.instance_id for card in self.deck]
        ids.extend(card.instance_id for card in self.hand)
        ids.extend(card.instance_id for card in self.discard)
        ids.extend(lane.card.instance_id for lane in self.field)
        return ids


@dataclass
class MvpCards:
    """Best performers recorded when the game finishes."""

    user: UserCard | None = None
    post: PostCard | None = None


@dataclass
class GameState:
    """Progress of one simulation, from the initial deck to the final rank."""

    player: Player
    turn_count: int = 0
    phase: Phase = Phase.DRAW
    phase_multiplier: int = 1
    archive_multiplier: int = 1
    game_over: bool = False
    victory: bool = False
    final_rank: str | None = None
    buzz_history: list[int] = field(default_factory=lambda: [0])
    mvp_cards: MvpCards | None = None


# =============================================================================
# SNAPSHOT SERIALIZATION
# =============================================================================


def card_to_dict(card: Card) -> dict[str, Any]:
    """Serialize a card with its variant tag."""
    data = asdict(card)
    data["type"] = card.type.value
    return data


def card_from_dict(data: dict[str, Any]) -> Card:
    """Rebuild a card from its tagged dict form."""
    fields = {key: value for key, value in data.items() if key != "type"}
    match CardType(data["type"]):
        case CardType.USER:
            return UserCard(**fields)
        case CardType.POST:
            return PostCard(**fields)


def game_state_to_dict(state: GameState) -> dict[str, Any]:
    """Serialize a game state to JSON-compatible primitives."""
    player = state.player
    mvp: dict[str, Any] | None = None
    if state.mvp_cards is not None:
        mvp = {
            "user": card_to_dict(state.mvp_cards.user) if state.mvp_cards.user else None,
            "post": card_to_dict(state.mvp_cards.post) if state.mvp_cards.post else None,
        }

    return {
        "player": {
            "deck": [card_to_dict(c) for c in player.deck],
            "hand": [card_to_dict(c) for c in player.hand],
            "discard": [card_to_dict(c) for c in player.discard],
            "field": [
                {
                    "id": lane.id,
                    "card": card_to_dict(lane.card),
                    "turn_created": lane.turn_created,
                }
                for lane in player.field
            ],
            "pds_capacity": player.pds_capacity,
            "pds_current": player.pds_current,
            "buzz_points": player.buzz_points,
        },
        "turn_count": state.turn_count,
        "phase": state.phase.value,
        "phase_multiplier": state.phase_multiplier,
        "archive_multiplier": state.archive_multiplier,
        "game_over": state.game_over,
        "victory": state.victory,
        "final_rank": state.final_rank,
        "buzz_history": list(state.buzz_history),
        "mvp_cards": mvp,
    }


def game_state_from_dict(data: dict[str, Any]) -> GameState:
    """Rebuild a game state from its snapshot dict."""
    raw_player = data["player"]
    lanes: list[Lane] = []
    for raw_lane in raw_player["field"]:
        card = card_from_dict(raw_lane["card"])
        if not isinstance(card, UserCard):
            raise ValueError(f"Lane {raw_lane['id']} holds a non-user card")
        lanes.append(Lane(id=raw_lane["id"], card=card, turn_created=raw_lane["turn_created"]))

    player = Player(
        deck=[card_from_dict(c) for c in raw_player["deck"]],
        hand=[card_from_dict(c) for c in raw_player["hand"]],
        discard=[card_from_dict(c) for c in raw_player["discard"]],
        field=lanes,
        pds_capacity=raw_player["pds_capacity"],
        pds_current=raw_player["pds_current"],
        buzz_points=raw_player["buzz_points"],
    )

    mvp_cards: MvpCards | None = None
    raw_mvp = data.get("mvp_cards")
    if raw_mvp is not None:
        user = card_from_dict(raw_mvp["user"]) if raw_mvp.get("user") else None
        post = card_from_dict(raw_mvp["post"]) if raw_mvp.get("post") else None
        mvp_cards = MvpCards(
            user=user if isinstance(user, UserCard) else None,
            post=post if isinstance(post, PostCard) else None,
        )

    return GameState(
        player=player,
        turn_count=data["turn_count"],
        phase=Phase(data["phase"]),
        phase_multiplier=data["phase_multiplier"],
        archive_multiplier=data["archive_multiplier"],
        game_over=data["game_over"],
        victory=data["victory"],
        final_rank=data.get("final_rank"),
        buzz_history=list(data["buzz_history"]),
        mvp_cards=mvp_cards,
    )
