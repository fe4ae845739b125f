"""
Tests for play validation and safety.
"""

from false_show_engine.cards import Card
from false_show_engine.validate import is_safe_play, validate_ownership, validate_play


def test_no_cards():
    result = validate_play([])
    assert not result.valid
    assert result.error == 'No cards selected'


def test_any_single_is_valid(card):
    """Test a single card is always a valid play."""
    result = validate_play([card('KD')])
    assert result.valid
    assert result.play_type == 'single'
    assert not result.has_joker


def test_pair_same_rank(cards):
    result = validate_play(cards('9S 9D'))
    assert result.valid
    assert result.play_type == 'pair'


def test_pair_needs_matching_rank(cards):
    result = validate_play(cards('9S 10S'))
    assert not result.valid
    assert result.error == 'Not a valid pair'


def test_joker_completes_any_pair(cards, card):
    """Test the joker pairs with any card."""
    result = validate_play(cards('9S 2H'), card('2H'))
    assert result.valid
    assert result.play_type == 'pair'
    assert result.has_joker


def test_sequence_in_any_order(cards):
    """Test selection order does not matter for sequences."""
    result = validate_play(cards('5H 3H 4H'))
    assert result.valid
    assert result.play_type == 'sequence'


def test_sequence_must_share_suit(cards):
    result = validate_play(cards('3H 4S 5H'))
    assert not result.valid
    assert result.error == 'Sequence must be same suit'


def test_sequence_must_be_consecutive(cards):
    result = validate_play(cards('3H 4H 6H'))
    assert not result.valid
    assert result.error == 'Cards must be sequential'


def test_ace_is_low_only(cards):
    """Test Q-K-A does not wrap around."""
    assert validate_play(cards('AS 2S 3S')).valid
    assert not validate_play(cards('QS KS AS')).valid


def test_joker_in_sequence_skips_gap_check(cards, card):
    """Test a joker-containing sequence of one suit is accepted with gaps."""
    result = validate_play(cards('3H 9H KC'), card('KC'))
    assert result.valid
    assert result.play_type == 'sequence'
    assert result.has_joker


def test_joker_sequence_still_checks_suit(cards, card):
    """Test non-joker cards in a sequence must share a suit."""
    result = validate_play(cards('3H 4S KC'), card('KC'))
    assert not result.valid
    assert result.error == 'Sequence must be same suit'


def test_safe_when_rank_shared(cards):
    assert is_safe_play(cards('7H'), cards('7S'))
    assert is_safe_play(cards('6D 7D 8D'), cards('8S 8C'))


def test_unsafe_when_no_rank_shared(cards):
    assert not is_safe_play(cards('2D 2C'), cards('7S'))


def test_safe_without_previous_play(cards):
    assert is_safe_play(cards('2D'), None)
    assert is_safe_play(cards('2D'), [])


def test_validate_ownership(cards):
    missing = validate_ownership(cards('3H 4H'), cards('4H 5H'))
    assert missing == [Card('hearts', '5')]
