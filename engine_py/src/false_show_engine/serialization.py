"""
State serialization and sanitization utilities.
"""

import random
from typing import Any, Dict, Optional

import orjson

from .cards import Card, cards_from_dicts, cards_to_dicts
from .constants import PROTOCOL_VERSION
from .deck import Deck
from .errors import INVALID_STATE, GameError, raise_error
from .hand import Hand
from .models import GameState, PendingPenalty, Play, Player


def _card_or_none(card: Optional[Card]) -> Optional[Dict[str, str]]:
    return card.to_dict() if card else None


def play_to_dict(play: Optional[Play]) -> Optional[Dict[str, Any]]:
    if play is None:
        return None
    return {
        "player_id": play.player_id,
        "player_name": play.player_name,
        "cards": cards_to_dicts(play.cards),
        "type": play.type,
        "is_safe": play.is_safe,
        "timestamp": play.timestamp,
    }


def play_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Play]:
    if data is None:
        return None
    return Play(
        player_id=data["player_id"],
        player_name=data.get("player_name"),
        cards=cards_from_dicts(data["cards"]),
        type=data["type"],
        is_safe=data.get("is_safe", True),
        timestamp=data.get("timestamp", 0.0),
    )


def _pending_to_dict(pending: Optional[PendingPenalty]) -> Optional[Dict[str, Any]]:
    if pending is None:
        return None
    return {
        "player_id": pending.player_id,
        "previous_play": play_to_dict(pending.previous_play),
    }


def public_player(player: Player) -> Dict[str, Any]:
    """Player info that every viewer may see."""
    return {
        "id": player.id,
        "name": player.name,
        "avatar": player.avatar,
        "score": player.score,
        "hand_size": player.hand.size(),
        "is_eliminated": player.is_eliminated,
        "has_drawn_penalty": player.has_drawn_penalty,
        "is_bot": player.is_bot,
    }


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Read-only projection of the game state for rendering or broadcasting.

    Args:
        state: Game state to project
        viewer_id: ID of the player viewing the state (to show their cards)

    Returns:
        Projection dictionary safe for JSON transmission
    """
    current = state.current_player()
    sanitized = {
        "state": state.phase,
        "players": [public_player(p) for p in state.players],
        "current_player": current.id if current else None,
        "last_play": play_to_dict(state.last_play),
        "joker": _card_or_none(state.joker_card),
        "joker_options": cards_to_dicts(state.joker_options),
        "opening_card": _card_or_none(state.initial_card),
        "deck_size": state.deck.cards_remaining(),
        "round_number": state.round_number,
        "score_limit": state.score_limit,
        "pending_penalty": _pending_to_dict(state.pending_penalty),
    }

    # Show full hand only to the viewer
    viewer = state.get_player(viewer_id) if viewer_id else None
    if viewer:
        sanitized["hand"] = cards_to_dicts(viewer.hand.cards)

    return sanitized


def serialize_state(state: GameState) -> Dict[str, Any]:
    """Flat snapshot holding everything needed to rebuild ``state``."""
    return {
        "protocol_version": PROTOCOL_VERSION,
        "players": [
            {
                "id": p.id,
                "name": p.name,
                "avatar": p.avatar,
                "score": p.score,
                "is_eliminated": p.is_eliminated,
                "has_drawn_penalty": p.has_drawn_penalty,
                "is_bot": p.is_bot,
                "cards": cards_to_dicts(p.hand.cards),
                "selected": sorted(p.hand.selected_cards),
            }
            for p in state.players
        ],
        "deck": cards_to_dicts(state.deck.cards),
        "played_cards": cards_to_dicts(state.played_cards),
        "current_player_index": state.current_player_index,
        "last_play": play_to_dict(state.last_play),
        "pending_penalty": _pending_to_dict(state.pending_penalty),
        "joker_card": _card_or_none(state.joker_card),
        "joker_options": cards_to_dicts(state.joker_options),
        "initial_card": _card_or_none(state.initial_card),
        "score_limit": state.score_limit,
        "game_state": state.phase,
        "round_number": state.round_number,
        "game_log": list(state.game_log),
    }


def deserialize_state(data: Dict[str, Any], rng: Optional[random.Random] = None) -> GameState:
    """
    Rebuild a game state from a snapshot produced by ``serialize_state``.

    Raises:
        GameError: If the snapshot is malformed or from another protocol version
    """
    version = data.get("protocol_version") if isinstance(data, dict) else None
    if version != PROTOCOL_VERSION:
        raise_error(INVALID_STATE, f"Unsupported protocol version: {version}")

    try:
        players = []
        for p in data["players"]:
            hand = Hand(cards_from_dicts(p["cards"]))
            hand.selected_cards = set(p.get("selected", []))
            players.append(Player(
                id=p["id"],
                name=p["name"],
                avatar=p.get("avatar", '👤'),
                score=p["score"],
                is_eliminated=p["is_eliminated"],
                has_drawn_penalty=p.get("has_drawn_penalty", False),
                is_bot=p.get("is_bot", False),
                hand=hand,
            ))

        pending = data.get("pending_penalty")
        joker = data.get("joker_card")
        initial = data.get("initial_card")
        return GameState(
            players=players,
            deck=Deck(rng=rng, cards=cards_from_dicts(data["deck"])),
            current_player_index=data["current_player_index"],
            played_cards=cards_from_dicts(data.get("played_cards", [])),
            last_play=play_from_dict(data.get("last_play")),
            pending_penalty=PendingPenalty(
                player_id=pending["player_id"],
                previous_play=play_from_dict(pending.get("previous_play")),
            ) if pending else None,
            joker_card=Card.from_dict(joker) if joker else None,
            joker_options=cards_from_dicts(data.get("joker_options", [])),
            initial_card=Card.from_dict(initial) if initial else None,
            score_limit=data["score_limit"],
            phase=data["game_state"],
            round_number=data["round_number"],
            game_log=list(data.get("game_log", [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise GameError(INVALID_STATE, f"Malformed game snapshot: {e}") from e


def encode_snapshot(snapshot: Dict[str, Any]) -> bytes:
    """Encode a snapshot for transmission to followers."""
    return orjson.dumps(snapshot)


def decode_snapshot(raw: bytes) -> Dict[str, Any]:
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise GameError(INVALID_STATE, f"Snapshot is not valid JSON: {e}") from e
