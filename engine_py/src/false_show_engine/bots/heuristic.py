"""
Heuristic bot with easy, medium and hard tiers.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from ..cards import Card, cards_from_dicts, format_cards
from ..constants import (
    DIFFICULTIES, DIFFICULTY_EASY, DIFFICULTY_HARD, DIFFICULTY_MEDIUM,
    PENALTY_CHOICE_DECK, PENALTY_CHOICE_PICKUP, PLAY_SEQUENCE
)
from ..hand import Hand
from ..validate import is_safe_play
from .base import DEFAULT_THINKING_TIME, BaseBot, BotAction
from .candidates import CandidatePlay, calculate_play_value, find_all_valid_plays

logger = logging.getLogger(__name__)

MAX_SHOW_CARDS = 5
BLUFF_CHANCE = 0.1
AVERAGE_CARD_VALUE = 7
LARGE_HAND = 6


class HeuristicBot(BaseBot):
    """
    Bot that picks plays by difficulty tier.

    Strategy:
    - easy: random legal play, Show only with a tiny hand
    - medium: dump high cards first, hold the joker while the hand is large
    - hard: score plays on safety, value and run length; bluff Show now and then
    """

    def __init__(
        self,
        player_id: str,
        difficulty: str = DIFFICULTY_MEDIUM,
        thinking_time: float = DEFAULT_THINKING_TIME,
        rng: Optional[random.Random] = None
    ):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty}")
        super().__init__(player_id, thinking_time, rng)
        self.difficulty = difficulty

    def choose_action(self, game_state: Dict[str, Any], hand: Hand, joker_card: Optional[Card]) -> Optional[BotAction]:
        valid_plays = find_all_valid_plays(hand, joker_card)
        if not valid_plays:
            return None

        hand_value = hand.hand_value(joker_card)
        if self.should_call_show(game_state, hand_value, hand.size()):
            logger.info(f"Bot {self.player_id} calls Show with {hand_value} points")
            return BotAction.show()

        # Holding only the joker: Show or throw it away
        if hand.size() == 1 and hand.has_joker(joker_card):
            if hand_value <= 10:
                return BotAction.show()
            # Only reachable if the joker stops counting as 0
            return BotAction.play(hand.cards)

        play = self.choose_best_play(valid_plays, self.get_last_play_cards(game_state), joker_card, hand)
        logger.debug(f"Bot {self.player_id} ({self.difficulty}) plays {format_cards(play.cards)}")
        return BotAction.play(play.cards)

    def choose_best_play(
        self,
        valid_plays: List[CandidatePlay],
        last_play_cards: List[Card],
        joker_card: Optional[Card],
        hand: Hand
    ) -> CandidatePlay:
        safe_plays = [p for p in valid_plays if is_safe_play(p.cards, last_play_cards)]
        plays = safe_plays or valid_plays

        if self.difficulty == DIFFICULTY_EASY:
            return self.rng.choice(plays)
        if self.difficulty == DIFFICULTY_MEDIUM:
            return self._medium_strategy(plays, last_play_cards, joker_card, hand)
        return self._hard_strategy(plays, last_play_cards, joker_card, hand)

    def _medium_strategy(self, plays, last_play_cards, joker_card, hand) -> CandidatePlay:
        hold_joker = hand.size() > 5

        def sort_key(play: CandidatePlay):
            safe = is_safe_play(play.cards, last_play_cards)
            uses_joker = hold_joker and play.has_joker(joker_card)
            return (not safe, uses_joker, -play.value)

        return sorted(plays, key=sort_key)[0]

    def _hard_strategy(self, plays, last_play_cards, joker_card, hand) -> CandidatePlay:
        cards_left = hand.size()

        # Endgame: get rid of the heaviest play
        if cards_left <= 3:
            return max(plays, key=lambda p: p.value)

        def score(play: CandidatePlay) -> float:
            total = 0.0
            if is_safe_play(play.cards, last_play_cards):
                total += 10
            total += play.value * 0.5
            if play.type == PLAY_SEQUENCE:
                total += len(play.cards) * 3
            if play.has_joker(joker_card) and cards_left > 5:
                total -= 15
            return total

        return max(plays, key=score)

    def should_call_show(self, game_state: Dict[str, Any], hand_value: int, cards_left: int) -> bool:
        if cards_left > MAX_SHOW_CARDS:
            return False

        if self.difficulty == DIFFICULTY_EASY:
            return hand_value <= 5 and cards_left <= 2

        if self.difficulty == DIFFICULTY_MEDIUM:
            if hand_value <= 3:
                return True
            return hand_value <= 8 and cards_left <= 2

        if self.difficulty == DIFFICULTY_HARD:
            if hand_value == 0:
                return True
            if hand_value <= 5 and cards_left <= 3:
                return True
            if hand_value <= 10 and cards_left == 1:
                return True
            if hand_value <= 15 and self.estimate_opponent_hands(game_state):
                return self.rng.random() < BLUFF_CHANCE

        return False

    def estimate_opponent_hands(self, game_state: Dict[str, Any]) -> bool:
        """Opponents holding four or more cards on average probably hold high hands."""
        opponents = self.get_opponents(game_state)
        if not opponents:
            return False
        average = sum(p.get('hand_size', 0) for p in opponents) / len(opponents)
        return average >= 4

    def choose_penalty(self, game_state: Dict[str, Any], hand: Hand) -> str:
        pending = game_state.get('pending_penalty') or {}
        previous_play = pending.get('previous_play')
        if not previous_play:
            return PENALTY_CHOICE_DECK

        joker = game_state.get('joker')
        joker_card = Card.from_dict(joker) if joker else None
        previous_cards = cards_from_dicts(previous_play.get('cards', []))
        previous_value = calculate_play_value(previous_cards, joker_card)

        if previous_value > len(previous_cards) * AVERAGE_CARD_VALUE:
            return PENALTY_CHOICE_DECK
        if hand.size() > LARGE_HAND:
            return PENALTY_CHOICE_DECK
        return PENALTY_CHOICE_PICKUP
