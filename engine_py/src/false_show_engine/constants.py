"""Game constants and utilities"""

from typing import Dict, List

SUITS = ['spades', 'hearts', 'diamonds', 'clubs']
RANKS = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']

RANK_VALUES: Dict[str, int] = {rank: index + 1 for index, rank in enumerate(RANKS)}

SUIT_SYMBOLS = {
    'spades': '♠',
    'hearts': '♥',
    'diamonds': '♦',
    'clubs': '♣',
}

RED_SUITS = ('hearts', 'diamonds')

DECK_SIZE = len(SUITS) * len(RANKS)

# Game phases
PHASE_WAITING = 'waiting'
PHASE_PLAYING = 'playing'
PHASE_ROUND_END = 'roundEnd'
PHASE_GAME_OVER = 'gameOver'

# Play types
PLAY_SINGLE = 'single'
PLAY_PAIR = 'pair'
PLAY_SEQUENCE = 'sequence'

# Penalty handling
PENALTY_MODE_DRAW = 'draw'
PENALTY_MODE_CHOICE = 'choice'
PENALTY_CHOICE_DECK = 'deck'
PENALTY_CHOICE_PICKUP = 'pickup'
PENALTY_CHOICES = (PENALTY_CHOICE_DECK, PENALTY_CHOICE_PICKUP)

# Bot difficulty tiers
DIFFICULTY_EASY = 'easy'
DIFFICULTY_MEDIUM = 'medium'
DIFFICULTY_HARD = 'hard'
DIFFICULTIES = (DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD)

DEFAULT_SCORE_LIMIT = 100
WRONG_SHOW_PENALTY = 50
JOKER_OPTION_COUNT = 2
DEALER_ID = 'dealer'
DEALER_NAME = 'Initial Card'
PROTOCOL_VERSION = 1

MIN_PLAYERS = 2
MAX_PLAYERS = 8


def cards_per_player(player_count: int) -> int:
    """Number of cards dealt to each active player."""
    if player_count <= 2:
        return 10
    if player_count == 3:
        return 9
    if player_count == 4:
        return 8
    if player_count == 5:
        return 7
    return 6
