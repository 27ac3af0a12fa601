"""Card-related data structures and helpers for Plump."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union


class Suit(Enum):
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    ACE = "A"
    KING = "K"
    QUEEN = "Q"
    JACK = "J"
    TEN = "10"
    NINE = "9"
    EIGHT = "8"
    SEVEN = "7"
    SIX = "6"
    FIVE = "5"
    FOUR = "4"
    THREE = "3"
    TWO = "2"

    def __str__(self) -> str:
        return self.value


# Wire sentinel for "no trump"; never used as a card suit.
NO_TRUMP = "NT"

# Rank order from highest to lowest.
RANK_ORDER: list[Rank] = list(Rank)
SUIT_ORDER: list[Suit] = list(Suit)

RANK_INDEX: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

SUIT_LETTERS: dict[str, Suit] = {
    "S": Suit.SPADES,
    "H": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "C": Suit.CLUBS,
}


class CardParseError(ValueError):
    """Raised when a card or trump label cannot be understood."""


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


def suit_of(card: Card) -> Suit:
    return card.suit


def rank_index(card: Card) -> int:
    """Return the rank position where lower means stronger (ace is 0)."""
    return RANK_INDEX[card.rank]


def card_strength(card: Card) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    return len(RANK_ORDER) - 1 - RANK_INDEX[card.rank]


def beats(candidate: Card, current: Card, led_suit: Suit, trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        return card_strength(candidate) > card_strength(current)

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True

    return False


def parse_suit(value: Union[str, Suit]) -> Suit:
    if isinstance(value, Suit):
        return value
    if not isinstance(value, str):
        raise CardParseError(f"Not a suit: {value!r}")
    text = value.strip()
    for suit in Suit:
        if text == suit.value or text.upper() == suit.name:
            return suit
    letter = SUIT_LETTERS.get(text.upper())
    if letter is None:
        raise CardParseError(f"Unknown suit: {value!r}")
    return letter


def parse_card(value: Union[str, Card, Mapping[str, str]]) -> Card:
    """Build a card from a label such as ``"10♥"`` / ``"QS"`` or a rank/suit mapping."""
    if isinstance(value, Card):
        return value
    if isinstance(value, Mapping):
        try:
            return Card(_parse_rank(value["rank"]), parse_suit(value["suit"]))
        except KeyError as exc:
            raise CardParseError("Card mapping requires 'rank' and 'suit'.") from exc
    if not isinstance(value, str) or len(value.strip()) < 2:
        raise CardParseError(f"Not a card label: {value!r}")
    text = value.strip()
    return Card(_parse_rank(text[:-1]), parse_suit(text[-1]))


def _parse_rank(value: Union[str, Rank]) -> Rank:
    if isinstance(value, Rank):
        return value
    if not isinstance(value, str):
        raise CardParseError(f"Not a rank: {value!r}")
    text = value.strip().upper()
    if text == "T":
        text = "10"
    for rank in Rank:
        if text == rank.value or text == rank.name:
            return rank
    raise CardParseError(f"Unknown rank: {value!r}")


def parse_trump(value: Union[str, Suit, None]) -> Optional[Suit]:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().upper() in {NO_TRUMP, "NO_TRUMP", "NONE"}:
        return None
    return parse_suit(value)


def serialize_trump(trump: Optional[Suit]) -> str:
    return NO_TRUMP if trump is None else trump.value


def serialize_card(card: Card) -> str:
    return str(card)


def deserialize_card(payload: Union[str, Mapping[str, str]]) -> Card:
    return parse_card(payload)


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
