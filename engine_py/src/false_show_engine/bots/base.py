"""
Base bot interface and utilities.
"""

import asyncio
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..cards import Card, cards_from_dicts
from ..hand import Hand

DEFAULT_THINKING_TIME = 1.5  # seconds


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, **kwargs):
        self.type = action_type
        self.data = kwargs

    @classmethod
    def play(cls, cards: List[Card]) -> 'BotAction':
        """Create a play action."""
        return cls('play', cards=list(cards))

    @classmethod
    def show(cls) -> 'BotAction':
        """Create a Show call."""
        return cls('show')

    @property
    def cards(self) -> List[Card]:
        return self.data.get('cards', [])

    def __eq__(self, other) -> bool:
        return isinstance(other, BotAction) and self.type == other.type and self.data == other.data

    def __repr__(self) -> str:
        return f"BotAction({self.type!r}, {self.data!r})"


class BaseBot(ABC):
    """Abstract base class for bot players."""

    def __init__(
        self,
        player_id: str,
        thinking_time: float = DEFAULT_THINKING_TIME,
        rng: Optional[random.Random] = None
    ):
        self.player_id = player_id
        self.thinking_time = thinking_time
        self.rng = rng or random.Random()

    async def make_play(self, game_state: Dict[str, Any], hand: Hand, joker_card: Optional[Card]) -> Optional[BotAction]:
        """
        Pause for the thinking time, then decide.

        The pause only paces the game; it is not cancellable.
        """
        await asyncio.sleep(self.thinking_time)
        return self.choose_action(game_state, hand, joker_card)

    @abstractmethod
    def choose_action(self, game_state: Dict[str, Any], hand: Hand, joker_card: Optional[Card]) -> Optional[BotAction]:
        """
        Choose an action based on the current game state.

        Args:
            game_state: Engine projection from ``get_game_state``
            hand: This bot's hand
            joker_card: The round's joker

        Returns:
            BotAction to take, or None if the hand is empty
        """
        pass

    @abstractmethod
    def choose_penalty(self, game_state: Dict[str, Any], hand: Hand) -> str:
        """Return ``'deck'`` or ``'pickup'``."""
        pass

    def get_last_play_cards(self, game_state: Dict[str, Any]) -> List[Card]:
        """Cards of the play currently on the table."""
        last_play = game_state.get('last_play')
        if not last_play:
            return []
        return cards_from_dicts(last_play.get('cards', []))

    def get_opponents(self, game_state: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Active players other than this bot."""
        return [
            p for p in game_state.get('players', [])
            if not p.get('is_eliminated') and p.get('id') != self.player_id
        ]

    def is_my_turn(self, game_state: Dict[str, Any]) -> bool:
        return game_state.get('current_player') == self.player_id

    def has_pending_penalty(self, game_state: Dict[str, Any]) -> bool:
        pending = game_state.get('pending_penalty')
        return bool(pending) and pending.get('player_id') == self.player_id
