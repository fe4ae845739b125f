# engine_py/src/false_show_engine/scoring.py

from typing import Dict, List, Tuple

from .cards import cards_to_dicts
from .models import Player


def collect_hand_values(players: List[Player]) -> List[dict]:
    """Raw hand value and cards of every given player, in seat order."""
    return [
        {
            "player_id": p.id,
            "value": p.hand.hand_value(),
            "cards": cards_to_dicts(p.hand.cards),
        }
        for p in players
    ]


def score_show(players: List[Player], caller_id: str, wrong_show_penalty: int) -> Tuple[bool, Dict[str, int]]:
    """
    Compute the score deltas for a Show call.

    The caller is correct when their hand value equals the lowest value among
    the given players (ties count as correct). A correct caller adds 0 and
    everyone else adds their own hand value. A wrong caller adds the flat
    penalty, the holders of the lowest value add 0, and everyone else adds
    their own hand value.

    Args:
        players: The active players, caller included
        caller_id: ID of the player calling Show
        wrong_show_penalty: Flat penalty for an incorrect call

    Returns:
        Tuple of (caller was correct, player_id -> score delta)
    """
    values = {p.id: p.hand.hand_value() for p in players}
    lowest = min(values.values())
    correct = values[caller_id] == lowest

    deltas = {}
    for player_id, value in values.items():
        if player_id == caller_id:
            deltas[player_id] = 0 if correct else wrong_show_penalty
        elif not correct and value == lowest:
            deltas[player_id] = 0
        else:
            deltas[player_id] = value
    return correct, deltas


def score_round_win(players: List[Player], winner_id: str) -> Dict[str, int]:
    """Winner adds 0; everyone else adds their own hand value."""
    return {
        p.id: 0 if p.id == winner_id else p.hand.hand_value()
        for p in players
    }


def apply_scores(players: List[Player], deltas: Dict[str, int]):
    for player in players:
        player.score += deltas.get(player.id, 0)


def apply_eliminations(players: List[Player], score_limit: int) -> List[str]:
    """
    Eliminate every player whose score reached the limit.

    Elimination is permanent; already eliminated players are left alone.

    Returns:
        IDs of the players eliminated by this call
    """
    eliminated = []
    for player in players:
        if not player.is_eliminated and player.score >= score_limit:
            player.is_eliminated = True
            eliminated.append(player.id)
    return eliminated
