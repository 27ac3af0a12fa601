"""Game state model for Plump.

A :class:`GameState` is an immutable snapshot of the whole match. Transitions
never touch an existing snapshot; they build a new one with
:func:`dataclasses.replace` and fresh containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .cards import Card, Suit, parse_card, parse_trump, serialize_card, serialize_trump
from .rules_schema import ScoringConfig
from .trick import Trick

STATE_VERSION = 1


class Phase(Enum):
    LOBBY = "Lobby"
    BIDDING = "Bidding"
    TRICK = "Trick"
    SCORING = "Scoring"
    ROUND_END = "RoundEnd"


class PlayerKind(Enum):
    HUMAN = "human"
    BOT = "bot"


@dataclass(frozen=True)
class Player:
    id: str
    kind: PlayerKind = PlayerKind.HUMAN


@dataclass(frozen=True)
class HandScore:
    """Outcome of one completed hand."""

    hand_size: int
    bids: Mapping[str, int]
    table_wins: Mapping[str, int]
    deltas: Mapping[str, int]


@dataclass(frozen=True)
class GameState:
    rng_seed: str
    phase: Phase = Phase.LOBBY
    players: Tuple[Player, ...] = ()
    turn: Optional[str] = None
    turn_seconds: int = 0
    timer: Optional[int] = None
    hand_sizes: Tuple[int, ...] = ()
    round_index: int = 0
    lead_index: int = 0
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    scores: Mapping[str, int] = field(default_factory=dict)
    bids: Mapping[str, int] = field(default_factory=dict)
    trump: Optional[Suit] = None
    hands: Optional[Mapping[str, Tuple[Card, ...]]] = None
    trick: Optional[Trick] = None
    table_wins: Optional[Mapping[str, int]] = None
    hand_history: Tuple[HandScore, ...] = ()
    version: int = STATE_VERSION

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return tuple(player.id for player in self.players)

    @property
    def leader(self) -> str:
        """Player leading the current hand."""
        return self.players[self.lead_index].id

    def has_player(self, player_id: str) -> bool:
        return any(player.id == player_id for player in self.players)

    def seat_of(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise KeyError(player_id)

    def next_player(self, player_id: str) -> str:
        """Return the player after ``player_id`` in the turn ring."""
        return self.players[(self.seat_of(player_id) + 1) % len(self.players)].id

    def previous_player(self, player_id: str) -> str:
        return self.players[(self.seat_of(player_id) - 1) % len(self.players)].id

    def current_hand_size(self) -> int:
        if self.round_index >= len(self.hand_sizes):
            return 0
        return self.hand_sizes[self.round_index]

    def hand_of(self, player_id: str) -> Tuple[Card, ...]:
        if self.hands is None:
            return ()
        return self.hands.get(player_id, ())

    def cards_remaining(self) -> int:
        if self.hands is None:
            return 0
        return sum(len(hand) for hand in self.hands.values())

    def evolve(self, **changes: Any) -> GameState:
        return replace(self, **changes)


def initial_state(seed: str) -> GameState:
    """Return the Lobby state of a fresh match."""
    if not seed:
        raise ValueError("Seed must be a non-empty string.")
    return GameState(rng_seed=seed)


# Serialisation ---------------------------------------------------------


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Return a JSON-ready snapshot using the wire (camelCase) field names."""
    return {
        "version": state.version,
        "phase": state.phase.value,
        "players": [{"id": player.id, "kind": player.kind.value} for player in state.players],
        "turn": state.turn,
        "rngSeed": state.rng_seed,
        "turnSeconds": state.turn_seconds,
        "timer": state.timer,
        "handSizes": list(state.hand_sizes),
        "roundIndex": state.round_index,
        "leadIndex": state.lead_index,
        "scoring": state.scoring.model_dump(by_alias=True),
        "scores": dict(state.scores),
        "bids": dict(state.bids),
        "trump": serialize_trump(state.trump),
        "hands": (
            None
            if state.hands is None
            else {pid: [serialize_card(card) for card in cards] for pid, cards in state.hands.items()}
        ),
        "trick": (
            None
            if state.trick is None
            else {
                "leader": state.trick.leader,
                "plays": [
                    {"playerId": pid, "card": serialize_card(card)} for pid, card in state.trick.plays
                ],
            }
        ),
        "tableWins": None if state.table_wins is None else dict(state.table_wins),
        "handHistory": [
            {
                "handSize": record.hand_size,
                "bids": dict(record.bids),
                "tableWins": dict(record.table_wins),
                "deltas": dict(record.deltas),
            }
            for record in state.hand_history
        ],
    }


def state_from_dict(payload: Mapping[str, Any]) -> GameState:
    hands = payload.get("hands")
    trick = payload.get("trick")
    table_wins = payload.get("tableWins")
    return GameState(
        rng_seed=payload["rngSeed"],
        phase=Phase(payload["phase"]),
        players=tuple(
            Player(id=item["id"], kind=PlayerKind(item.get("kind", "human")))
            for item in payload.get("players", [])
        ),
        turn=payload.get("turn"),
        turn_seconds=payload.get("turnSeconds", 0),
        timer=payload.get("timer"),
        hand_sizes=tuple(payload.get("handSizes", [])),
        round_index=payload.get("roundIndex", 0),
        lead_index=payload.get("leadIndex", 0),
        scoring=ScoringConfig.model_validate(payload.get("scoring", {})),
        scores=dict(payload.get("scores", {})),
        bids=dict(payload.get("bids", {})),
        trump=parse_trump(payload.get("trump")),
        hands=(
            None
            if hands is None
            else {pid: tuple(parse_card(card) for card in cards) for pid, cards in hands.items()}
        ),
        trick=(
            None
            if trick is None
            else Trick(
                leader=trick["leader"],
                plays=tuple((play["playerId"], parse_card(play["card"])) for play in trick["plays"]),
            )
        ),
        table_wins=None if table_wins is None else dict(table_wins),
        hand_history=tuple(
            HandScore(
                hand_size=record["handSize"],
                bids=dict(record["bids"]),
                table_wins=dict(record["tableWins"]),
                deltas=dict(record["deltas"]),
            )
            for record in payload.get("handHistory", [])
        ),
        version=payload.get("version", STATE_VERSION),
    )
