"""
Game Engine: Turn Phases, PDS Budget and Scoring.

One player works through a deck over a fixed number of turns. Each turn
draws to a full hand, spends a refilled PDS budget on plays, then scores
every lane on the field.

INVARIANTS:
- Every card instance sits in exactly one of deck, hand, discard or a lane
- pds_current never exceeds pds_capacity
- buzz_points never decreases
- Phases run draw -> main -> end within a turn
- The archive multiplier is consumed by the next play and by end of turn
- A finished game accepts no further operations

REJECTION:
An operation called in the wrong phase, with a bad hand index, or without
enough PDS returns False, logs ACTION_REJECTED, and changes nothing.
"""

import logging
import uuid
from dataclasses import replace
from typing import Any

from buzzdeck.config import FALLBACK_RANK, GameConfig
from buzzdeck.models.card import Card, PostCard, UserCard
from buzzdeck.models.game_state import GameState, Lane, MvpCards, Phase, Player

logger = logging.getLogger(__name__)


def tier(turn: int, config: GameConfig | None = None) -> int:
    """Phase multiplier for a turn number."""
    config = config or GameConfig()
    multiplier = 1
    for first_turn, tier_multiplier in config.phase_tiers:
        if turn >= first_turn:
            multiplier = tier_multiplier
    return multiplier


def rank_for(buzz_points: int, config: GameConfig | None = None) -> str:
    """Letter rank for a buzz total, highest threshold first."""
    config = config or GameConfig()
    for rank, threshold in config.rank_thresholds:
        if buzz_points >= threshold:
            return rank
    return FALLBACK_RANK


def pds_capacity_for(turn: int, config: GameConfig | None = None) -> int:
    """PDS capacity granted on a turn."""
    config = config or GameConfig()
    return config.initial_capacity + (turn - 1) * config.capacity_increment


def create_initial_state(deck: list[Card], config: GameConfig | None = None) -> GameState:
    """Set up a game around a finished deck. The deck is drawn front first."""
    config = config or GameConfig()
    player = Player(
        deck=list(deck),
        pds_capacity=config.initial_capacity,
        pds_current=config.initial_capacity,
    )
    return GameState(player=player)


class GameEngine:
    """
    Applies player actions to a GameState.

    The engine owns its state between calls. Callers read engine.state after
    each operation and must not mutate it.
    """

    def __init__(self, state: GameState, config: GameConfig | None = None) -> None:
        self.state = state
        self.config = config or GameConfig()

    @classmethod
    def new_game(cls, deck: list[Card], config: GameConfig | None = None) -> "GameEngine":
        config = config or GameConfig()
        return cls(create_initial_state(deck, config), config)

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    def _reject(self, action: str, reason: str, **detail: Any) -> bool:
        logger.warning(
            "ACTION_REJECTED",
            extra={
                "action": action,
                "reason": reason,
                "turn": self.state.turn_count,
                "phase": self.state.phase.value,
                **detail,
            },
        )
        return False

    def _in_main_phase(self, action: str) -> bool:
        if self.state.game_over:
            self._reject(action, "game_over")
            return False
        if self.state.phase is not Phase.MAIN:
            self._reject(action, "wrong_phase")
            return False
        return True

    def _valid_hand_index(self, action: str, hand_index: int) -> bool:
        if not 0 <= hand_index < len(self.state.player.hand):
            self._reject(
                action,
                "invalid_hand_index",
                hand_index=hand_index,
                hand_size=len(self.state.player.hand),
            )
            return False
        return True

    def _draw(self, count: int) -> int:
        player = self.state.player
        drawn = player.deck[:count]
        del player.deck[:count]
        player.hand.extend(drawn)
        return len(drawn)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def start_turn(self) -> bool:
        """
        Begin the next turn.

        Sets the phase multiplier and PDS capacity for the new turn, refills
        PDS to capacity and draws up to the target hand size. A short deck
        draws what it can.
        """
        state = self.state
        if state.game_over:
            return self._reject("start_turn", "game_over")
        if state.phase is Phase.MAIN:
            return self._reject("start_turn", "turn_in_progress")

        state.phase = Phase.DRAW
        state.turn_count += 1
        state.phase_multiplier = tier(state.turn_count, self.config)

        player = state.player
        player.pds_capacity = pds_capacity_for(state.turn_count, self.config)
        player.pds_current = player.pds_capacity

        needed = max(0, self.config.initial_hand_size - len(player.hand))
        drawn = self._draw(needed)
        if drawn < needed:
            logger.info("Deck exhausted: drew %d of %d on turn %d", drawn, needed, state.turn_count)

        state.phase = Phase.MAIN
        return True

    def archive_card(self, hand_index: int) -> bool:
        """Discard a hand card unscored to double the multiplier on the next play."""
        if not self._in_main_phase("archive_card"):
            return False
        if not self._valid_hand_index("archive_card", hand_index):
            return False

        player = self.state.player
        player.discard.append(player.hand.pop(hand_index))
        self.state.archive_multiplier *= 2
        return True

    def play_card(self, hand_index: int) -> bool:
        """
        Spend PDS to play a hand card.

        User cards take a lane at the front of the field with their power
        scaled by the archive multiplier. Post cards score immediately and go
        to the discard. Either way the archive multiplier resets.
        """
        if not self._in_main_phase("play_card"):
            return False
        if not self._valid_hand_index("play_card", hand_index):
            return False

        state = self.state
        player = state.player
        card = player.hand[hand_index]
        if player.pds_current < card.cost:
            return self._reject(
                "play_card",
                "insufficient_pds",
                cost=card.cost,
                pds_current=player.pds_current,
            )

        player.pds_current -= card.cost
        del player.hand[hand_index]

        match card:
            case UserCard():
                boosted = replace(card, power=card.power * state.archive_multiplier)
                player.field.insert(
                    0,
                    Lane(id=str(uuid.uuid4()), card=boosted, turn_created=state.turn_count),
                )
            case PostCard():
                gain = card.power * state.phase_multiplier * state.archive_multiplier
                player.buzz_points += gain
                player.discard.append(replace(card, played_score=gain))

        state.archive_multiplier = 1
        return True

    def pds_boost(self) -> bool:
        """Spend PDS to draw one extra card."""
        if not self._in_main_phase("pds_boost"):
            return False

        player = self.state.player
        cost = self.config.boost_cost
        if player.pds_current < cost:
            return self._reject(
                "pds_boost", "insufficient_pds", cost=cost, pds_current=player.pds_current
            )
        if not player.deck:
            return self._reject("pds_boost", "deck_empty")

        player.pds_current -= cost
        self._draw(1)
        return True

    def end_turn(self) -> bool:
        """
        Score the field and close the turn.

        Every lane scores every turn it stays on the field. Finishes the game
        once the turn limit is reached.
        """
        if not self._in_main_phase("end_turn"):
            return False

        state = self.state
        player = state.player
        state.phase = Phase.END

        field_score = sum(lane.card.power for lane in player.field)
        player.buzz_points += field_score * state.phase_multiplier
        state.buzz_history.append(player.buzz_points)

        if state.turn_count >= self.config.max_turns:
            self.finish_game()

        state.archive_multiplier = 1
        return True

    def finish_game(self) -> bool:
        """Close the game and assign the final rank."""
        state = self.state
        if state.game_over:
            return self._reject("finish_game", "game_over")

        state.game_over = True
        state.final_rank = rank_for(state.player.buzz_points, self.config)
        state.victory = state.final_rank == self.config.rank_thresholds[0][0]
        state.mvp_cards = _pick_mvp_cards(state.player)

        logger.info(
            "Game finished on turn %d with %d buzz, rank %s",
            state.turn_count,
            state.player.buzz_points,
            state.final_rank,
        )
        return True


def _pick_mvp_cards(player: Player) -> MvpCards:
    """Strongest lane on the field and highest-scoring played post."""
    best_user = max((lane.card for lane in player.field), key=lambda c: c.power, default=None)
    played_posts = [
        c for c in player.discard if isinstance(c, PostCard) and c.played_score is not None
    ]
    best_post = max(played_posts, key=lambda c: c.played_score or 0, default=None)
    return MvpCards(user=best_user, post=best_post)
