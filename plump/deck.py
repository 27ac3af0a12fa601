"""Deck creation and seeded shuffling for Plump."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .cards import RANK_ORDER, SUIT_ORDER, Card

MASK_32 = 0xFFFFFFFF

# 32-bit FNV-1a parameters.
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

# Numerical Recipes LCG, modulus 2**32.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223


def full_deck() -> List[Card]:
    """Return the ordered 52-card deck, suit-major then rank from ace down."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


DECK_SIZE = len(full_deck())


def seed_hash(seed: str) -> int:
    """Hash a seed string to 32 bits, one UTF-16 code unit at a time."""
    encoded = seed.encode("utf-16-le")
    value = FNV_OFFSET_BASIS
    for offset in range(0, len(encoded), 2):
        value ^= int.from_bytes(encoded[offset : offset + 2], "little")
        value = (value * FNV_PRIME) & MASK_32
    return value


class LinearCongruentialGenerator:
    """Minimal 32-bit LCG; each call to ``next`` advances and returns the state."""

    def __init__(self, state: int) -> None:
        self.state = state & MASK_32

    def next(self) -> int:
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) & MASK_32
        return self.state


def shuffle(deck: Sequence[Card], seed: str) -> List[Card]:
    """Return a Fisher-Yates permutation of ``deck`` fully determined by ``seed``."""
    rng = LinearCongruentialGenerator(seed_hash(seed))
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.next() % (i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def hand_seed(rng_seed: str, round_index: int) -> str:
    """Derive the shuffle seed for one hand of the match."""
    return f"{rng_seed}:{round_index}"


def deal(seed: str, hand_size: int, player_ids: Sequence[str]) -> Dict[str, Tuple[Card, ...]]:
    """Deal ``hand_size`` cards to every player from a deck shuffled with ``seed``."""
    if hand_size < 0:
        raise ValueError("Hand size must not be negative.")
    if hand_size * len(player_ids) > DECK_SIZE:
        raise ValueError(
            f"Cannot deal {hand_size} cards to {len(player_ids)} players from {DECK_SIZE} cards."
        )
    cards = shuffle(full_deck(), seed)
    return {
        player_id: tuple(cards[index * hand_size : (index + 1) * hand_size])
        for index, player_id in enumerate(player_ids)
    }
