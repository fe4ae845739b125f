"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Optional

from .cards import Card
from .constants import DEFAULT_SCORE_LIMIT, PHASE_WAITING
from .deck import Deck
from .hand import Hand


@dataclass
class Player:
    id: str
    name: str
    avatar: str = '👤'
    score: int = 0  # persists across rounds
    is_eliminated: bool = False
    has_drawn_penalty: bool = False
    is_bot: bool = False
    hand: Hand = field(default_factory=Hand)


@dataclass
class Play:
    player_id: str
    cards: List[Card]
    type: str  # single|pair|sequence
    is_safe: bool = True
    timestamp: float = 0.0
    player_name: Optional[str] = None

    @property
    def value(self) -> int:
        return sum(card.value for card in self.cards)


@dataclass
class PendingPenalty:
    player_id: str
    previous_play: Optional[Play] = None  # what the unsafe play was made against


@dataclass
class GameState:
    players: List[Player] = field(default_factory=list)
    deck: Deck = field(default_factory=Deck)
    current_player_index: int = 0
    played_cards: List[Card] = field(default_factory=list)
    last_play: Optional[Play] = None
    pending_penalty: Optional[PendingPenalty] = None
    joker_card: Optional[Card] = None
    joker_options: List[Card] = field(default_factory=list)
    initial_card: Optional[Card] = None
    score_limit: int = DEFAULT_SCORE_LIMIT
    phase: str = PHASE_WAITING  # waiting|playing|roundEnd|gameOver
    round_number: int = 0
    game_log: List[str] = field(default_factory=list)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_eliminated]

    def current_player(self) -> Optional[Player]:
        active = self.active_players()
        if not active:
            return None
        return active[self.current_player_index % len(active)]
