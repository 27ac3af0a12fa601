"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .cards import Card, Suit, beats
from .rejections import RuleViolation


class TrickError(RuleViolation):
    """Raised when trick play breaks ordering constraints."""


@dataclass(frozen=True)
class Trick:
    leader: str
    plays: Tuple[Tuple[str, Card], ...] = ()

    def is_empty(self) -> bool:
        return not self.plays

    def has_played(self, player_id: str) -> bool:
        return any(player == player_id for player, _ in self.plays)

    def with_play(self, player_id: str, card: Card, player_count: int) -> Trick:
        """Return a new trick with the play appended."""
        if len(self.plays) >= player_count:
            raise TrickError("Trick already complete.")
        if not self.plays and player_id != self.leader:
            raise TrickError("Only the leader can start the trick.")
        if self.has_played(player_id):
            raise TrickError(f"Player {player_id} already played to this trick.")
        return Trick(leader=self.leader, plays=self.plays + ((player_id, card),))

    def led_suit(self) -> Optional[Suit]:
        return self.plays[0][1].suit if self.plays else None

    def is_full(self, player_count: int) -> bool:
        return len(self.plays) == player_count

    def winning_play(self, trump: Optional[Suit]) -> Tuple[str, Card]:
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        led = self.led_suit()
        assert led is not None
        winning_player, winning_card = self.plays[0]
        for player, card in self.plays[1:]:
            if beats(card, winning_card, led, trump):
                winning_player, winning_card = player, card
        return winning_player, winning_card
