"""Legal move generation and card play for Plump."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .cards import Card, card_strength
from .rejections import RuleViolation
from .scoring import finish_hand
from .state import GameState
from .trick import Trick

logger = logging.getLogger(__name__)


class InvalidPlay(RuleViolation):
    """Raised when an illegal card play is attempted."""


def legal_moves(hand: Iterable[Card], trick: Optional[Trick]) -> List[Card]:
    """Return the cards that may be played, weakest first."""
    cards = list(hand)
    if trick is None or trick.is_empty():
        return sorted(cards, key=card_strength)

    led = trick.led_suit()
    in_led = [card for card in cards if card.suit is led]
    return sorted(in_led or cards, key=card_strength)


def is_legal_play(hand: Iterable[Card], trick: Optional[Trick], card: Card) -> bool:
    return card in legal_moves(hand, trick)


def auto_play_card(hand: Iterable[Card], trick: Optional[Trick]) -> Optional[Card]:
    """Pick the forced play on timeout: the lowest legal card, lead suit first."""
    legal = legal_moves(hand, trick)
    if not legal:
        return None
    led = trick.led_suit() if trick is not None else None
    in_led = [card for card in legal if card.suit is led]
    return (in_led or legal)[0]


def play_card(state: GameState, player_id: str, card: Card) -> GameState:
    hand = state.hand_of(player_id)
    if card not in hand:
        raise InvalidPlay(f"Card {card} is not in {player_id}'s hand.")
    if not is_legal_play(hand, state.trick, card):
        raise InvalidPlay(f"Card {card} does not follow the lead suit {state.trick.led_suit()}.")

    trick = state.trick if state.trick is not None else Trick(leader=player_id)
    trick = trick.with_play(player_id, card, len(state.players))

    remaining = list(hand)
    remaining.remove(card)
    hands = {**(state.hands or {}), player_id: tuple(remaining)}
    state = state.evolve(hands=hands, trick=trick)

    if not trick.is_full(len(state.players)):
        return state.evolve(turn=state.next_player(player_id), timer=state.turn_seconds)
    return _complete_trick(state, trick)


def _complete_trick(state: GameState, trick: Trick) -> GameState:
    winner, winning_card = trick.winning_play(state.trump)
    table_wins = dict(state.table_wins or {})
    table_wins[winner] = table_wins.get(winner, 0) + 1
    logger.debug("Trick won by %s with %s", winner, winning_card)
    state = state.evolve(table_wins=table_wins, trick=None)

    if state.cards_remaining() == 0:
        return finish_hand(state)
    return state.evolve(turn=winner, timer=state.turn_seconds)
