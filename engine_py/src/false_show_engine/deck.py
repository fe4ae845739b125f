"""
Deck construction, shuffling and drawing.
"""

import random
from typing import List, Optional

from .cards import Card, full_deck


class Deck:
    """
    Ordered 52-card deck. The top of the deck is the end of ``cards``.

    Drawing from an empty deck silently returns fewer cards than asked for.
    """

    def __init__(self, rng: Optional[random.Random] = None, cards: Optional[List[Card]] = None):
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        if cards is None:
            self.reset()
        else:
            self.cards = list(cards)

    def reset(self):
        self.cards = full_deck()

    def shuffle(self):
        self.rng.shuffle(self.cards)

    def draw(self, count: int = 1) -> List[Card]:
        """Draw up to ``count`` cards from the top."""
        drawn = []
        for _ in range(count):
            if not self.cards:
                break
            drawn.append(self.cards.pop())
        return drawn

    def draw_bottom(self, count: int = 2) -> List[Card]:
        """Draw up to ``count`` cards from the bottom."""
        drawn = []
        for _ in range(count):
            if not self.cards:
                break
            drawn.append(self.cards.pop(0))
        return drawn

    def cards_remaining(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)


def create_shuffled_deck(seed: Optional[int] = None) -> Deck:
    """
    Create a full deck and shuffle it deterministically if seed is provided.

    Args:
        seed: Optional seed for deterministic shuffling

    Returns:
        A freshly shuffled deck
    """
    deck = Deck(rng=random.Random(seed))
    deck.shuffle()
    return deck
