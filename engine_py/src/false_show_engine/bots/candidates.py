"""
Enumeration of the legal plays in a hand.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..cards import Card
from ..constants import PLAY_PAIR, PLAY_SEQUENCE, PLAY_SINGLE
from ..hand import Hand


@dataclass
class CandidatePlay:
    type: str
    cards: List[Card]
    value: int  # joker counts 0

    def has_joker(self, joker_card: Optional[Card]) -> bool:
        return joker_card is not None and joker_card in self.cards


def calculate_play_value(cards: Sequence[Card], joker_card: Optional[Card]) -> int:
    return sum(0 if card.is_joker(joker_card) else card.value for card in cards)


def find_all_valid_plays(hand: Hand, joker_card: Optional[Card]) -> List[CandidatePlay]:
    """
    List every single, every pair, and the forward-scanned runs of a hand.

    Runs are found by walking forward from each starting card over the
    value-sorted hand, extending with the next same-suit card one value up or
    with the joker. This does not search every subset, so some legal runs are
    not offered.
    """
    cards = hand.cards
    plays = [
        CandidatePlay(PLAY_SINGLE, [card], calculate_play_value([card], joker_card))
        for card in cards
    ]

    for i in range(len(cards) - 1):
        for j in range(i + 1, len(cards)):
            first, second = cards[i], cards[j]
            if first.matches_rank(second) or first.is_joker(joker_card) or second.is_joker(joker_card):
                pair = [first, second]
                plays.append(CandidatePlay(PLAY_PAIR, pair, calculate_play_value(pair, joker_card)))

    for i in range(len(cards) - 2):
        run = [cards[i]]
        suit = cards[i].suit
        last_value = cards[i].value
        for card in cards[i + 1:]:
            is_joker = card.is_joker(joker_card)
            if is_joker or (card.suit == suit and card.value == last_value + 1):
                run.append(card)
                last_value = last_value + 1 if is_joker else card.value
                if len(run) >= 3:
                    plays.append(CandidatePlay(PLAY_SEQUENCE, list(run), calculate_play_value(run, joker_card)))

    return plays
