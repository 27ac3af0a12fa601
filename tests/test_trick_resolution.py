from plump.cards import Suit, parse_card
from plump.mechanics import auto_play_card, legal_moves
from plump.protocol import PlayCard
from plump.reducer import apply_command
from plump.rejections import RejectionReason
from plump.state import GameState, Phase, Player
from plump.trick import Trick


def cards(*names):
    return tuple(parse_card(name) for name in names)


def trick_state(hands, *, trump=None, turn=None, bids=None, turn_seconds=5):
    ids = tuple(hands)
    hand_size = len(next(iter(hands.values())))
    return GameState(
        rng_seed="trick-test",
        phase=Phase.TRICK,
        players=tuple(Player(pid) for pid in ids),
        turn=turn or ids[0],
        turn_seconds=turn_seconds,
        timer=turn_seconds,
        hand_sizes=(hand_size,),
        scores={pid: 0 for pid in ids},
        bids=bids or {pid: 0 for pid in ids},
        trump=trump,
        hands={pid: cards(*names) for pid, names in hands.items()},
        table_wins={pid: 0 for pid in ids},
    )


def play(state, player_id, card):
    return apply_command(state, PlayCard(player_id=player_id, card=parse_card(card)))


def play_all(state, moves):
    for player_id, card in moves:
        result = play(state, player_id, card)
        assert result.accepted, result.rejection
        state = result.state
    return state


THREE_HANDS = {
    "A": ["K♥", "3♣"],
    "B": ["2♠", "4♣"],
    "C": ["A♥", "5♣"],
}


def test_trump_beats_higher_lead_suit_card():
    state = trick_state(THREE_HANDS, trump=Suit.SPADES)
    state = play_all(state, [("A", "K♥"), ("B", "2♠"), ("C", "A♥")])

    assert state.table_wins == {"A": 0, "B": 1, "C": 0}
    assert state.turn == "B"
    assert state.trick is None
    assert state.phase is Phase.TRICK
    assert state.timer == 5


def test_without_trump_highest_lead_suit_card_wins():
    state = trick_state(THREE_HANDS)
    state = play_all(state, [("A", "K♥"), ("B", "2♠"), ("C", "A♥")])

    assert state.table_wins["C"] == 1
    assert state.turn == "C"


def test_trick_winning_play_ignores_off_suit():
    trick = Trick(leader="A", plays=(("A", parse_card("K♥")), ("B", parse_card("A♣")), ("C", parse_card("Q♥"))))
    assert trick.winning_play(None) == ("A", parse_card("K♥"))
    assert trick.winning_play(Suit.CLUBS) == ("B", parse_card("A♣"))


def test_play_in_progress_passes_turn_and_resets_timer():
    state = trick_state(THREE_HANDS).evolve(timer=2)
    result = play(state, "A", "K♥")

    assert result.accepted
    assert result.state.turn == "B"
    assert result.state.timer == 5
    assert result.state.trick.plays == (("A", parse_card("K♥")),)
    assert result.state.hands["A"] == cards("3♣")
    assert state.hands["A"] == cards("K♥", "3♣")


def test_must_follow_lead_suit_when_able():
    state = trick_state({"A": ["K♥", "3♣"], "B": ["5♥", "2♠"]})
    state = play_all(state, [("A", "K♥")])

    result = play(state, "B", "2♠")
    assert not result.accepted
    assert result.rejection.reason is RejectionReason.RULE
    assert result.state is state


def test_card_not_in_hand_is_rejected():
    state = trick_state(THREE_HANDS)
    result = play(state, "A", "A♠")
    assert result.rejection.reason is RejectionReason.RULE
    assert result.state is state


def test_out_of_turn_play_is_rejected():
    state = trick_state(THREE_HANDS)
    result = play(state, "B", "2♠")
    assert result.rejection.reason is RejectionReason.TURN


def test_last_trick_moves_to_scoring():
    state = trick_state({"A": ["A♠"], "B": ["2♠"]}, bids={"A": 1, "B": 0})
    state = play_all(state, [("A", "A♠"), ("B", "2♠")])

    assert state.phase is Phase.SCORING
    assert state.turn is None
    assert state.timer is None
    assert state.table_wins == {"A": 1, "B": 0}
    assert state.scores == {"A": 11, "B": 10}
    assert len(state.hand_history) == 1
    assert state.hand_history[0].deltas == {"A": 11, "B": 10}


def test_legal_moves_sorted_weakest_first():
    hand = cards("K♥", "2♥", "A♣")
    assert legal_moves(hand, None) == list(cards("2♥", "K♥", "A♣"))

    trick = Trick(leader="A", plays=(("A", parse_card("9♣")),))
    assert legal_moves(hand, trick) == list(cards("A♣"))

    void_trick = Trick(leader="A", plays=(("A", parse_card("9♦")),))
    assert legal_moves(hand, void_trick) == list(cards("2♥", "K♥", "A♣"))


def test_auto_play_prefers_lowest_lead_suit_card():
    trick = Trick(leader="A", plays=(("A", parse_card("K♥")),))
    assert auto_play_card(cards("Q♥", "3♥", "2♠"), trick) == parse_card("3♥")
    assert auto_play_card(cards("Q♣", "2♦"), trick) == parse_card("2♦")
    assert auto_play_card((), trick) is None
