"""Turn countdown and forced play on expiry."""

from __future__ import annotations

import logging

from .mechanics import auto_play_card, play_card
from .state import GameState

logger = logging.getLogger(__name__)


def rotate_turn(state: GameState) -> GameState:
    """Hand the turn to the next player and restart their countdown."""
    assert state.turn is not None
    return state.evolve(turn=state.next_player(state.turn), timer=state.turn_seconds)


def tick(state: GameState) -> GameState:
    """Advance the countdown by one second, auto-playing when it runs out."""
    assert state.turn is not None
    current = state.timer if state.timer is not None else state.turn_seconds
    remaining = current - 1
    if remaining > 0:
        return state.evolve(timer=remaining)

    state = state.evolve(timer=0)
    card = auto_play_card(state.hand_of(state.turn), state.trick)
    already_played = state.trick is not None and state.trick.has_played(state.turn)
    if card is None or already_played:
        logger.debug("Timer expired for %s with nothing to play; passing the turn", state.turn)
        return rotate_turn(state)
    logger.debug("Timer expired for %s; auto-playing %s", state.turn, card)
    return play_card(state, state.turn, card)
