"""
Card value type and helpers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .constants import RANK_VALUES, RANKS, RED_SUITS, SUIT_SYMBOLS, SUITS


@dataclass(frozen=True)
class Card:
    """A playing card. Two cards are equal iff suit and rank match."""

    suit: str
    rank: str

    def __post_init__(self):
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def id(self) -> str:
        return f"{self.rank}-{self.suit}"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    @property
    def color(self) -> str:
        return 'red' if self.suit in RED_SUITS else 'black'

    def matches_rank(self, other: 'Card') -> bool:
        return self.rank == other.rank

    def is_joker(self, joker_card: Optional['Card']) -> bool:
        """Check whether this card is the round's designated joker."""
        return joker_card is not None and self == joker_card

    def to_dict(self) -> Dict[str, str]:
        return {"suit": self.suit, "rank": self.rank}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Card':
        return cls(suit=data["suit"], rank=str(data["rank"]))

    @classmethod
    def from_id(cls, card_id: str) -> 'Card':
        """Parse an id such as ``"10-hearts"``."""
        rank, sep, suit = card_id.partition('-')
        if not sep:
            raise ValueError(f"Invalid card ID format: {card_id}")
        return cls(suit=suit, rank=rank)

    def __str__(self) -> str:
        return f"{self.rank}{self.symbol}"


def full_deck() -> List[Card]:
    """Return one card per suit and rank, in suit-major order."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def cards_to_dicts(cards: Iterable[Card]) -> List[Dict[str, str]]:
    return [card.to_dict() for card in cards]


def cards_from_dicts(data: Iterable[Mapping[str, Any]]) -> List[Card]:
    return [Card.from_dict(item) for item in data]


def format_cards(cards: Iterable[Card]) -> str:
    return ', '.join(str(card) for card in cards)


def sort_key(card: Card):
    """Sort by value, then by suit order."""
    return (card.value, SUITS.index(card.suit))
