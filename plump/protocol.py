"""Command schema and command results exchanged with callers.

Commands are a closed union tagged by ``type``. The wire form uses camelCase
keys (``playerId``, ``handSizes``); Python callers may use the field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .cards import Card, CardParseError, Suit, parse_card, parse_trump, serialize_trump
from .rejections import CommandRejected, MalformedCommand, Rejection
from .rules_schema import ScoringConfig
from .state import GameState, PlayerKind


class _CommandModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AddPlayer(_CommandModel):
    type: Literal["ADD_PLAYER"] = "ADD_PLAYER"
    player_id: str = Field(..., alias="playerId", min_length=1)
    kind: PlayerKind = PlayerKind.HUMAN


class StartGame(_CommandModel):
    type: Literal["START_GAME"] = "START_GAME"
    hand_sizes: Tuple[int, ...] = Field(..., alias="handSizes", min_length=1)
    turn_seconds: int = Field(..., alias="turnSeconds", ge=1)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    @field_validator("hand_sizes")
    @classmethod
    def ensure_non_negative(cls, value: Tuple[int, ...]) -> Tuple[int, ...]:
        for size in value:
            if size < 0:
                raise ValueError(f"Hand size {size} is negative.")
        return value


class PlaceBid(_CommandModel):
    type: Literal["PLACE_BID"] = "PLACE_BID"
    player_id: str = Field(..., alias="playerId")
    bid: int


class SetTrump(_CommandModel):
    type: Literal["SET_TRUMP"] = "SET_TRUMP"
    trump: Optional[Suit] = None

    @field_validator("trump", mode="before")
    @classmethod
    def parse_trump_label(cls, value: Any) -> Optional[Suit]:
        try:
            return parse_trump(value)
        except CardParseError as exc:
            raise ValueError(str(exc)) from exc


class PlayCard(_CommandModel):
    type: Literal["PLAY_CARD"] = "PLAY_CARD"
    player_id: str = Field(..., alias="playerId")
    card: Card

    @field_validator("card", mode="before")
    @classmethod
    def parse_card_label(cls, value: Any) -> Card:
        try:
            return parse_card(value)
        except CardParseError as exc:
            raise ValueError(str(exc)) from exc


class Tick(_CommandModel):
    type: Literal["TICK"] = "TICK"


class NextTurn(_CommandModel):
    type: Literal["NEXT_TURN"] = "NEXT_TURN"


class NextHand(_CommandModel):
    type: Literal["NEXT_HAND"] = "NEXT_HAND"


Command = Union[AddPlayer, StartGame, PlaceBid, SetTrump, PlayCard, Tick, NextTurn, NextHand]

COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(
    Annotated[Command, Field(discriminator="type")]
)


def parse_command(payload: Union[Command, Mapping[str, Any]]) -> Command:
    """Validate a wire-form command mapping.

    Raises:
        MalformedCommand: unknown ``type`` or a payload that fails validation.
    """
    if isinstance(payload, BaseModel):
        if not isinstance(payload, _CommandModel):
            raise MalformedCommand(f"Unsupported command object {type(payload).__name__}.")
        return payload  # type: ignore[return-value]
    if not isinstance(payload, Mapping):
        raise MalformedCommand(f"Command must be a mapping, got {type(payload).__name__}.")
    try:
        return COMMAND_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise MalformedCommand(f"Invalid command: {exc.error_count()} validation error(s): {exc}") from exc


def dump_command(command: Command) -> dict[str, Any]:
    """Return the wire form of a command."""
    payload = command.model_dump(by_alias=True, mode="json")
    if isinstance(command, PlayCard):
        payload["card"] = str(command.card)
    elif isinstance(command, SetTrump):
        payload["trump"] = serialize_trump(command.trump)
    return payload


@dataclass(frozen=True)
class CommandResult:
    """Outcome of applying one command.

    ``state`` is the next state when accepted and the unchanged input state when
    rejected.
    """

    state: GameState
    command: Optional[Command] = None
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @classmethod
    def success(cls, state: GameState, command: Command) -> CommandResult:
        return cls(state=state, command=command)

    @classmethod
    def failure(
        cls, state: GameState, error: CommandRejected, command: Optional[Command] = None
    ) -> CommandResult:
        return cls(state=state, command=command, rejection=Rejection.from_error(error))
