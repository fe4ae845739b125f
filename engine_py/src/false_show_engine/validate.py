"""
Pattern validation for card plays.
"""

from typing import Iterable, List, Optional, Sequence

from .cards import Card
from .constants import PLAY_PAIR, PLAY_SEQUENCE, PLAY_SINGLE


class ValidationResult:
    """Result of pattern validation."""

    def __init__(
        self,
        valid: bool,
        play_type: Optional[str] = None,
        has_joker: bool = False,
        error: Optional[str] = None
    ):
        self.valid = valid
        self.play_type = play_type
        self.has_joker = has_joker
        self.error = error

    @classmethod
    def success(cls, play_type: str, has_joker: bool = False) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, play_type=play_type, has_joker=has_joker)

    @classmethod
    def failure(cls, error: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error=error)

    def __repr__(self) -> str:
        if self.valid:
            return f"ValidationResult(valid=True, play_type={self.play_type!r}, has_joker={self.has_joker})"
        return f"ValidationResult(valid=False, error={self.error!r})"


def contains_joker(cards: Iterable[Card], joker_card: Optional[Card]) -> bool:
    return joker_card is not None and any(card == joker_card for card in cards)


def validate_play(cards: Sequence[Card], joker_card: Optional[Card] = None) -> ValidationResult:
    """
    Classify a selection of cards as a single, pair or sequence.

    The joker stands in for any card: any pair containing it is valid, it is
    exempt from the sequence suit check, and a sequence containing it is
    accepted without checking for gaps.

    Args:
        cards: Selected cards, in any order
        joker_card: The round's joker, if one has been drawn

    Returns:
        ValidationResult with the play type or a human-readable error
    """
    if not cards:
        return ValidationResult.failure('No cards selected')

    has_joker = contains_joker(cards, joker_card)

    if len(cards) == 1:
        return ValidationResult.success(PLAY_SINGLE, has_joker)

    if len(cards) == 2:
        if cards[0].matches_rank(cards[1]) or has_joker:
            return ValidationResult.success(PLAY_PAIR, has_joker)
        return ValidationResult.failure('Not a valid pair')

    ordered = sorted(cards, key=lambda c: c.value)
    suit = ordered[0].suit
    if not all(card.suit == suit or card.is_joker(joker_card) for card in ordered):
        return ValidationResult.failure('Sequence must be same suit')

    if has_joker:
        return ValidationResult.success(PLAY_SEQUENCE, True)

    for previous, current in zip(ordered, ordered[1:]):
        if current.value != previous.value + 1:
            return ValidationResult.failure('Cards must be sequential')
    return ValidationResult.success(PLAY_SEQUENCE, False)


def is_safe_play(played_cards: Sequence[Card], previous_cards: Optional[Sequence[Card]]) -> bool:
    """A play is safe if it shares a rank with the previous play, or there is none."""
    if not previous_cards:
        return True
    previous_ranks = {card.rank for card in previous_cards}
    return any(card.rank in previous_ranks for card in played_cards)


def validate_ownership(hand_cards: Iterable[Card], cards: Iterable[Card]) -> List[Card]:
    """Return the cards not held in ``hand_cards``."""
    held = set(hand_cards)
    return [card for card in cards if card not in held]
