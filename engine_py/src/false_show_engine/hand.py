"""A player's hand and card selection."""

from typing import Iterable, Iterator, List, Optional, Set

from .cards import Card, sort_key
from .constants import PLAY_PAIR, PLAY_SEQUENCE
from .validate import ValidationResult, validate_play


class Hand:
    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else []
        self.selected_cards: Set[str] = set()

    def add_card(self, card: Card):
        self.cards.append(card)
        self.sort()

    def add_cards(self, cards: Iterable[Card]):
        self.cards.extend(cards)
        self.sort()

    def remove_card(self, card: Card) -> bool:
        try:
            self.cards.remove(card)
        except ValueError:
            return False
        self.selected_cards.discard(card.id)
        return True

    def remove_cards(self, cards: Iterable[Card]):
        for card in cards:
            self.remove_card(card)

    def sort(self):
        self.cards.sort(key=sort_key)

    def contains(self, card: Card) -> bool:
        return card in self.cards

    # Selection

    def get_selected_cards(self) -> List[Card]:
        return [card for card in self.cards if card.id in self.selected_cards]

    def toggle_card_selection(self, card_id: str):
        if card_id in self.selected_cards:
            self.selected_cards.discard(card_id)
        elif any(card.id == card_id for card in self.cards):
            self.selected_cards.add(card_id)

    def select(self, cards: Iterable[Card]):
        for card in cards:
            if card in self.cards:
                self.selected_cards.add(card.id)

    def clear_selection(self):
        self.selected_cards.clear()

    # Derived checks

    def hand_value(self, joker_card: Optional[Card] = None) -> int:
        """Sum of card values; the joker counts 0 when one is given."""
        return sum(0 if card.is_joker(joker_card) else card.value for card in self.cards)

    def has_joker(self, joker_card: Optional[Card]) -> bool:
        return joker_card is not None and joker_card in self.cards

    def get_valid_play(self, joker_card: Optional[Card] = None) -> ValidationResult:
        return validate_play(self.get_selected_cards(), joker_card)

    def can_play_single(self) -> bool:
        return len(self.selected_cards) == 1

    def can_play_pair(self, joker_card: Optional[Card] = None) -> bool:
        return len(self.selected_cards) == 2 and self.get_valid_play(joker_card).play_type == PLAY_PAIR

    def can_play_sequence(self, joker_card: Optional[Card] = None) -> bool:
        return len(self.selected_cards) >= 3 and self.get_valid_play(joker_card).play_type == PLAY_SEQUENCE

    def is_empty(self) -> bool:
        return not self.cards

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Hand({' '.join(str(card) for card in self.cards)})"
