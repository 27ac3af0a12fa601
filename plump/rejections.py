"""Rejection taxonomy shared by every subsystem.

Subsystems raise these; only the command processor catches them and turns them
into a :class:`Rejection` on the command result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RejectionReason(Enum):
    PHASE = "phase"
    TURN = "turn"
    RULE = "rule"
    CAPACITY = "capacity"
    MALFORMED = "malformed"


class CommandRejected(RuntimeError):
    """Base class for commands that leave the state untouched."""

    reason: RejectionReason = RejectionReason.RULE


class PhaseViolation(CommandRejected):
    """Raised when a command is not valid in the current phase."""

    reason = RejectionReason.PHASE


class TurnViolation(CommandRejected):
    """Raised when the acting player is not the one whose turn it is."""

    reason = RejectionReason.TURN


class RuleViolation(CommandRejected):
    """Raised when a bid or card play breaks the rules."""

    reason = RejectionReason.RULE


class CapacityViolation(CommandRejected):
    """Raised for duplicate player ids or player counts/hand sizes out of bounds."""

    reason = RejectionReason.CAPACITY


class MalformedCommand(CommandRejected):
    """Raised when a command is of unknown type or fails schema validation."""

    reason = RejectionReason.MALFORMED


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    message: str

    @classmethod
    def from_error(cls, error: CommandRejected) -> Rejection:
        return cls(reason=error.reason, message=str(error))
