"""Command processor: the single entry point for every state change.

``apply_command`` is a pure function ``(state, command) -> CommandResult``.
Subsystems signal an illegal command by raising a ``CommandRejected``
subclass; it is converted here into a rejection that carries the unchanged
input state.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Type, Union

from .bidding import place_bid, set_trump, start_bidding
from .mechanics import play_card
from .protocol import (
    AddPlayer,
    Command,
    CommandResult,
    NextHand,
    NextTurn,
    PlaceBid,
    PlayCard,
    SetTrump,
    StartGame,
    Tick,
    parse_command,
)
from .rejections import CapacityViolation, CommandRejected, MalformedCommand, PhaseViolation, TurnViolation
from .rules_schema import MAX_PLAYERS, MIN_PLAYERS, oversized_hands
from .state import GameState, Phase, Player, initial_state
from .timer import rotate_turn, tick

logger = logging.getLogger(__name__)

CommandType = Type[Any]

ALLOWED_BY_PHASE: Dict[Phase, FrozenSet[CommandType]] = {
    Phase.LOBBY: frozenset({AddPlayer, StartGame}),
    Phase.BIDDING: frozenset({PlaceBid, SetTrump}),
    Phase.TRICK: frozenset({PlayCard, Tick, NextTurn}),
    Phase.SCORING: frozenset({NextHand}),
    Phase.ROUND_END: frozenset(),
}

# Commands issued on behalf of a specific player; checked against ``turn``.
TURN_BOUND: FrozenSet[CommandType] = frozenset({PlaceBid, PlayCard})


def is_command_allowed(phase: Phase, command_type: CommandType) -> bool:
    return command_type in ALLOWED_BY_PHASE.get(phase, frozenset())


# Handlers ----------------------------------------------------------------


def _add_player(state: GameState, command: AddPlayer) -> GameState:
    if state.has_player(command.player_id):
        raise CapacityViolation(f"Player id {command.player_id!r} is already taken.")
    if len(state.players) >= MAX_PLAYERS:
        raise CapacityViolation(f"The table is full ({MAX_PLAYERS} players).")
    player = Player(id=command.player_id, kind=command.kind)
    return state.evolve(players=state.players + (player,))


def _start_game(state: GameState, command: StartGame) -> GameState:
    if len(state.players) < MIN_PLAYERS:
        raise CapacityViolation(f"At least {MIN_PLAYERS} players are needed to start.")
    too_big = oversized_hands(command.hand_sizes, len(state.players))
    if too_big:
        raise CapacityViolation(
            f"Hand sizes {too_big} cannot be dealt to {len(state.players)} players."
        )
    logger.info(
        "Starting game for %s with hand sizes %s",
        ", ".join(state.player_ids),
        list(command.hand_sizes),
    )
    state = state.evolve(
        hand_sizes=tuple(command.hand_sizes),
        turn_seconds=command.turn_seconds,
        scoring=command.scoring,
        scores={pid: 0 for pid in state.player_ids},
        round_index=0,
        lead_index=0,
        hand_history=(),
    )
    return start_bidding(state)


def _place_bid(state: GameState, command: PlaceBid) -> GameState:
    return place_bid(state, command.player_id, command.bid)


def _set_trump(state: GameState, command: SetTrump) -> GameState:
    return set_trump(state, command.trump)


def _play_card(state: GameState, command: PlayCard) -> GameState:
    return play_card(state, command.player_id, command.card)


def _tick(state: GameState, command: Tick) -> GameState:
    return tick(state)


def _next_turn(state: GameState, command: NextTurn) -> GameState:
    return rotate_turn(state)


def _next_hand(state: GameState, command: NextHand) -> GameState:
    round_index = state.round_index + 1
    if round_index >= len(state.hand_sizes):
        logger.info("Round complete; final scores %s", dict(state.scores))
        return state.evolve(
            phase=Phase.ROUND_END,
            round_index=round_index,
            turn=None,
            timer=None,
            bids={},
            trump=None,
            hands=None,
            trick=None,
            table_wins=None,
        )
    state = state.evolve(
        round_index=round_index,
        lead_index=(state.lead_index + 1) % len(state.players),
    )
    return start_bidding(state)


_HANDLERS: Dict[CommandType, Callable[[GameState, Any], GameState]] = {
    AddPlayer: _add_player,
    StartGame: _start_game,
    PlaceBid: _place_bid,
    SetTrump: _set_trump,
    PlayCard: _play_card,
    Tick: _tick,
    NextTurn: _next_turn,
    NextHand: _next_hand,
}


# Entry points -----------------------------------------------------------


def _ensure_allowed(state: GameState, command: Command) -> None:
    if not is_command_allowed(state.phase, type(command)):
        raise PhaseViolation(f"{command.type} is not allowed in phase {state.phase.value}.")
    if type(command) in TURN_BOUND and command.player_id != state.turn:
        raise TurnViolation(f"It is not {command.player_id}'s turn (waiting for {state.turn}).")


def apply_command(state: GameState, command: Union[Command, Mapping[str, Any]]) -> CommandResult:
    """Apply one command, returning the next state or a rejection."""
    parsed = None
    try:
        parsed = parse_command(command)
        handler = _HANDLERS.get(type(parsed))
        if handler is None:
            raise MalformedCommand(f"No handler for command {type(parsed).__name__}.")
        _ensure_allowed(state, parsed)
        new_state = handler(state, parsed)
    except CommandRejected as exc:
        logger.debug("Rejected %s (%s): %s", getattr(parsed, "type", command), exc.reason.value, exc)
        return CommandResult.failure(state, exc, parsed)
    logger.debug("Applied %s -> phase %s, turn %s", parsed.type, new_state.phase.value, new_state.turn)
    return CommandResult.success(new_state, parsed)


def run_commands(
    state: GameState, commands: Iterable[Union[Command, Mapping[str, Any]]]
) -> GameState:
    """Fold ``commands`` over ``state``; rejected commands leave it unchanged."""
    for command in commands:
        state = apply_command(state, command).state
    return state


def replay(seed: str, commands: Iterable[Union[Command, Mapping[str, Any]]]) -> GameState:
    return run_commands(initial_state(seed), commands)
