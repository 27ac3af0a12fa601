"""Validation schema for Plump table and scoring configuration."""

from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .deck import DECK_SIZE

MIN_PLAYERS = 2
MAX_PLAYERS = 7

MissMode = Literal["zero", "wins"]


class ScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    exact_bonus: int = Field(
        10,
        alias="exactBonus",
        ge=0,
        description="Bonus awarded on top of the bid when a player wins exactly what they bid.",
    )
    miss_mode: MissMode = Field(
        "zero",
        alias="missMode",
        description="'zero' scores nothing on a missed bid, 'wins' scores the tricks won.",
    )


def oversized_hands(hand_sizes: Sequence[int], player_count: int) -> list[int]:
    """Return the hand sizes that cannot be dealt to ``player_count`` players."""
    return [size for size in hand_sizes if size * player_count > DECK_SIZE]
