"""
Opponent decision logic.
"""

from .base import BaseBot, BotAction
from .candidates import CandidatePlay, calculate_play_value, find_all_valid_plays
from .heuristic import HeuristicBot

__all__ = [
    "BaseBot",
    "BotAction",
    "CandidatePlay",
    "HeuristicBot",
    "calculate_play_value",
    "find_all_valid_plays",
]
