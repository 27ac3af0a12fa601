"""Convenience service layer for UI, bot and transport callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .bidding import forbidden_bid
from .cards import card_label, serialize_card, serialize_trump
from .game import GameEngine
from .mechanics import legal_moves
from .protocol import dump_command
from .state import Phase, state_to_dict


@dataclass
class TrickPlayView:
    player: str
    card: str
    label: str


@dataclass
class TrickView:
    leader: str
    plays: list[TrickPlayView]


@dataclass
class TableView:
    phase: str
    perspective: str
    turn: Optional[str]
    timer: Optional[int]
    trump: str
    round_index: int
    hand_size: Optional[int]
    leader: Optional[str]
    hand: list[str]
    hand_labels: list[str]
    legal_moves: list[str]
    forbidden_bid: Optional[int]
    cards_remaining: dict[str, int]
    bids: dict[str, int]
    table_wins: dict[str, int]
    scores: dict[str, int]
    trick: Optional[TrickView]


@dataclass
class DispatchResponse:
    accepted: bool
    reason: Optional[str]
    message: Optional[str]
    command: Optional[dict]
    view: TableView


class TableService:
    """Facade around GameEngine that only ever reveals one player's cards."""

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()

    # Actions -----------------------------------------------------------

    def dispatch(self, payload: Mapping[str, Any], perspective: str) -> DispatchResponse:
        result = self.engine.dispatch(payload)
        rejection = result.rejection
        return DispatchResponse(
            accepted=result.accepted,
            reason=rejection.reason.value if rejection else None,
            message=rejection.message if rejection else None,
            command=dump_command(result.command) if result.command is not None else None,
            view=self.get_view(perspective),
        )

    # Views -------------------------------------------------------------

    def get_view(self, perspective: str) -> TableView:
        state = self.engine.state
        in_hand = state.phase in {Phase.BIDDING, Phase.TRICK, Phase.SCORING}
        hand = list(state.hand_of(perspective))

        legal = []
        if state.phase is Phase.TRICK and state.turn == perspective:
            legal = legal_moves(hand, state.trick)

        forbidden = None
        if state.phase is Phase.BIDDING and state.turn == perspective:
            forbidden = forbidden_bid(state, perspective)

        trick_view = None
        if state.trick is not None:
            trick_view = TrickView(
                leader=state.trick.leader,
                plays=[
                    TrickPlayView(player=pid, card=serialize_card(card), label=card_label(card))
                    for pid, card in state.trick.plays
                ],
            )

        return TableView(
            phase=state.phase.value,
            perspective=perspective,
            turn=state.turn,
            timer=state.timer,
            trump=serialize_trump(state.trump),
            round_index=state.round_index,
            hand_size=state.current_hand_size() if in_hand else None,
            leader=state.leader if in_hand else None,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_card(card) for card in legal],
            forbidden_bid=forbidden,
            cards_remaining={pid: len(state.hand_of(pid)) for pid in state.player_ids},
            bids=dict(state.bids),
            table_wins=dict(state.table_wins or {}),
            scores=dict(state.scores),
            trick=trick_view,
        )

    def snapshot(self) -> dict[str, Any]:
        """Full state for persistence or an authoritative server; reveals every hand."""
        return state_to_dict(self.engine.state)
