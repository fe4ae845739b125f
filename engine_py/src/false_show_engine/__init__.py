"""
Rules engine and opponent logic for the False Show card game.
"""

from .cards import Card
from .deck import Deck
from .engine import EngineResult, FalseShowEngine
from .hand import Hand
from .rules import GameSettings, create_settings

__all__ = [
    "Card",
    "Deck",
    "EngineResult",
    "FalseShowEngine",
    "GameSettings",
    "Hand",
    "create_settings",
]
