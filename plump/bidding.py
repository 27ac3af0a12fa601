"""Bidding rules: the deal, sequential bids and the forbidden-sum rule."""

from __future__ import annotations

import logging
from typing import Optional

from .cards import Suit
from .deck import deal, hand_seed
from .rejections import RuleViolation
from .scoring import finish_hand
from .state import GameState, Phase

logger = logging.getLogger(__name__)


class BiddingError(RuleViolation):
    """Base class for bidding related rejections."""


class BidOutOfRange(BiddingError):
    """Raised when a bid is negative or exceeds the hand size."""


class ForbiddenBid(BiddingError):
    """Raised when the last bidder would make the bids sum to the hand size."""


def start_bidding(state: GameState) -> GameState:
    """Deal the current hand and open bidding with the hand's leader."""
    hand_size = state.current_hand_size()
    player_ids = state.player_ids
    hands = deal(hand_seed(state.rng_seed, state.round_index), hand_size, player_ids)
    logger.info(
        "Starting hand %d of %d (%d cards, leader %s)",
        state.round_index + 1,
        len(state.hand_sizes),
        hand_size,
        state.leader,
    )
    return state.evolve(
        phase=Phase.BIDDING,
        hands=hands,
        bids={},
        trump=None,
        trick=None,
        table_wins={pid: 0 for pid in player_ids},
        turn=state.leader,
        timer=None,
    )


def last_bidder(state: GameState) -> str:
    """Return the player seated just before the leader; their bid closes the round."""
    return state.previous_player(state.leader)


def forbidden_bid(state: GameState, player_id: str) -> Optional[int]:
    """Return the bid ``player_id`` may not make, or None when nothing is forbidden.

    Hands of size zero are exempt: the only possible bid there is 0.
    """
    hand_size = state.current_hand_size()
    if hand_size == 0 or player_id != last_bidder(state):
        return None
    forbidden = hand_size - sum(state.bids.values())
    if forbidden < 0 or forbidden > hand_size:
        return None
    return forbidden


def validate_bid(state: GameState, player_id: str, bid: int) -> None:
    """Raise unless ``bid`` is acceptable from ``player_id`` right now."""
    hand_size = state.current_hand_size()
    if player_id in state.bids:
        raise BiddingError(f"Player {player_id} has already bid this hand.")
    if bid < 0 or bid > hand_size:
        raise BidOutOfRange(f"Bid {bid} must be between 0 and {hand_size}.")
    if bid == forbidden_bid(state, player_id):
        raise ForbiddenBid(
            f"Bid {bid} is forbidden: all bids would sum to the hand size {hand_size}."
        )


def place_bid(state: GameState, player_id: str, bid: int) -> GameState:
    validate_bid(state, player_id, bid)
    bids = {**state.bids, player_id: bid}
    if len(bids) < len(state.players):
        return state.evolve(bids=bids, turn=state.next_player(player_id))

    logger.debug("Bidding complete for hand %d: %s", state.round_index + 1, bids)
    if state.current_hand_size() == 0:
        return finish_hand(state.evolve(bids=bids))
    return state.evolve(
        phase=Phase.TRICK,
        bids=bids,
        turn=state.leader,
        trick=None,
        timer=state.turn_seconds,
    )


def set_trump(state: GameState, trump: Optional[Suit]) -> GameState:
    return state.evolve(trump=trump)
