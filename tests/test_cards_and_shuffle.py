import pytest

from plump.cards import (
    Card,
    CardParseError,
    Rank,
    Suit,
    beats,
    parse_card,
    parse_trump,
    rank_index,
    suit_of,
)
from plump.deck import DECK_SIZE, deal, full_deck, hand_seed, seed_hash, shuffle


def labels(cards):
    return [str(card) for card in cards]


def test_full_deck_is_suit_major_and_ace_high():
    deck = full_deck()
    assert len(deck) == DECK_SIZE == 52
    assert len(set(deck)) == 52
    assert labels(deck[:2]) == ["A♠", "K♠"]
    assert str(deck[12]) == "2♠"
    assert str(deck[13]) == "A♥"
    assert str(deck[-1]) == "2♣"


def test_rank_index_puts_ace_first():
    assert rank_index(Card(Rank.ACE, Suit.CLUBS)) == 0
    assert rank_index(Card(Rank.TEN, Suit.CLUBS)) == 4
    assert rank_index(Card(Rank.TWO, Suit.CLUBS)) == 12
    assert suit_of(parse_card("Q♦")) is Suit.DIAMONDS


def test_seed_hash_matches_fnv1a():
    assert seed_hash("") == 2166136261
    assert seed_hash("a") == 3826002220
    assert seed_hash("seed-123") == 3408388541


def test_shuffle_is_a_fixed_permutation_of_the_seed():
    deck = full_deck()
    shuffled = shuffle(deck, "seed-123")

    assert labels(shuffled[:8]) == ["9♦", "10♦", "10♣", "3♠", "5♣", "2♥", "J♣", "6♥"]
    assert shuffle(deck, "seed-123") == shuffled
    assert sorted(labels(shuffled)) == sorted(labels(deck))
    assert deck == full_deck()


def test_different_seeds_give_different_orders():
    assert shuffle(full_deck(), "a") != shuffle(full_deck(), "b")
    assert labels(shuffle(full_deck(), "a")[:4]) == ["10♠", "8♦", "A♠", "K♦"]


def test_deal_slices_the_hand_seeded_deck():
    hands = deal(hand_seed("seed-123", 0), 3, ["you", "bot"])
    assert labels(hands["you"]) == ["7♠", "J♣", "3♠"]
    assert labels(hands["bot"]) == ["8♣", "3♦", "3♥"]

    next_hand = deal(hand_seed("seed-123", 1), 2, ["you", "bot"])
    assert labels(next_hand["you"]) == ["Q♠", "Q♣"]


def test_deal_rejects_oversized_hands():
    with pytest.raises(ValueError):
        deal("x", 27, ["a", "b"])


def test_parse_card_accepts_labels_letters_and_mappings():
    assert parse_card("10♥") == Card(Rank.TEN, Suit.HEARTS)
    assert parse_card("qs") == Card(Rank.QUEEN, Suit.SPADES)
    assert parse_card("TD") == Card(Rank.TEN, Suit.DIAMONDS)
    assert parse_card({"rank": "ace", "suit": "clubs"}) == Card(Rank.ACE, Suit.CLUBS)
    with pytest.raises(CardParseError):
        parse_card("1♥")
    with pytest.raises(CardParseError):
        parse_card("K?")


def test_parse_trump_handles_no_trump_sentinel():
    assert parse_trump("NT") is None
    assert parse_trump(None) is None
    assert parse_trump("♠") is Suit.SPADES


def test_beats_prefers_trump_then_led_suit():
    led = Suit.HEARTS
    assert beats(parse_card("2♠"), parse_card("A♥"), led, Suit.SPADES)
    assert not beats(parse_card("A♥"), parse_card("2♠"), led, Suit.SPADES)
    assert beats(parse_card("A♥"), parse_card("K♥"), led, None)
    assert not beats(parse_card("A♣"), parse_card("2♥"), led, None)
