"""Hand scoring helpers for Plump."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from .rules_schema import ScoringConfig
from .state import GameState, HandScore, Phase

logger = logging.getLogger(__name__)


class ScoringError(ValueError):
    """Raised when a hand cannot be scored."""


@dataclass(frozen=True)
class HandScoreResult:
    new_scores: Dict[str, int]
    deltas: Dict[str, int]
    exact: Dict[str, bool]


def score_bid(bid: int, tricks_won: int, config: ScoringConfig) -> int:
    """Return the points for one player's hand."""
    if tricks_won == bid:
        return config.exact_bonus + bid
    if config.miss_mode == "wins":
        return tricks_won
    return 0


def score_hand(
    *,
    bids: Mapping[str, int],
    table_wins: Mapping[str, int],
    prior_scores: Mapping[str, int],
    config: ScoringConfig,
) -> HandScoreResult:
    missing = set(bids) ^ set(table_wins)
    if missing:
        raise ScoringError(f"Bids and tricks do not cover the same players: {sorted(missing)}")

    deltas = {pid: score_bid(bids[pid], table_wins[pid], config) for pid in bids}
    new_scores = dict(prior_scores)
    for pid, delta in deltas.items():
        new_scores[pid] = new_scores.get(pid, 0) + delta

    return HandScoreResult(
        new_scores=new_scores,
        deltas=deltas,
        exact={pid: bids[pid] == table_wins[pid] for pid in bids},
    )


def finish_hand(state: GameState) -> GameState:
    """Score the hand just played and move the match into Scoring."""
    table_wins = dict(state.table_wins or {})
    result = score_hand(
        bids=state.bids,
        table_wins=table_wins,
        prior_scores=state.scores,
        config=state.scoring,
    )
    record = HandScore(
        hand_size=state.current_hand_size(),
        bids=dict(state.bids),
        table_wins=table_wins,
        deltas=result.deltas,
    )
    logger.info("Hand %d scored: %s", state.round_index + 1, result.deltas)
    return state.evolve(
        phase=Phase.SCORING,
        turn=None,
        timer=None,
        trick=None,
        scores=result.new_scores,
        hand_history=state.hand_history + (record,),
    )
