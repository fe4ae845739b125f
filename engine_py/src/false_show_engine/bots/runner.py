"""
Drive bots against an engine through its public operations.
"""

import logging
from typing import Dict, Optional

from ..constants import PHASE_PLAYING
from ..engine import EngineResult, FalseShowEngine
from .base import BaseBot

logger = logging.getLogger(__name__)


def next_actor(engine: FalseShowEngine) -> Optional[str]:
    """The player the engine is waiting on, if any."""
    state = engine.state
    if state.phase != PHASE_PLAYING:
        return None
    if state.pending_penalty:
        return state.pending_penalty.player_id
    current = engine.get_current_player()
    return current.id if current else None


async def execute_bot_turn(engine: FalseShowEngine, bot: BaseBot) -> Optional[EngineResult]:
    """
    Let ``bot`` act once if the engine is waiting on it.

    A pending penalty is resolved first; otherwise the bot plays or calls
    Show on its turn. Rejections are logged and returned as-is.

    Returns:
        The engine result, or None if the bot had nothing to do
    """
    player = engine.get_player(bot.player_id)
    if not player or player.is_eliminated:
        logger.warning(f"Bot {bot.player_id} is not an active player")
        return None

    game_state = engine.get_game_state(bot.player_id)

    if bot.has_pending_penalty(game_state):
        choice = bot.choose_penalty(game_state, player.hand)
        logger.info(f"Bot {player.name} takes the penalty from the {choice}")
        result = engine.handle_penalty_choice(bot.player_id, choice)
    elif next_actor(engine) == bot.player_id:
        action = await bot.make_play(game_state, player.hand, engine.joker_card)
        if not action:
            logger.warning(f"Bot {player.name} returned no action")
            return None

        logger.info(f"Bot {player.name} chose: {action.type}")
        if action.type == 'show':
            result = engine.call_show(bot.player_id)
        elif action.type == 'play':
            result = engine.play_cards(bot.player_id, action.cards)
        else:
            logger.error(f"Bot {player.name} unknown action: {action.type}")
            return None
    else:
        return None

    if not result.success:
        logger.error(f"Bot {player.name} action rejected: {result.error_message}")
    return result


async def run_bot_round(engine: FalseShowEngine, bots: Dict[str, BaseBot], max_actions: int = 1000) -> Optional[EngineResult]:
    """
    Keep letting bots act until the round ends or a non-bot player must act.

    Returns:
        The last engine result produced
    """
    result = None
    for _ in range(max_actions):
        actor = next_actor(engine)
        if actor is None or actor not in bots:
            break
        result = await execute_bot_turn(engine, bots[actor])
        if result is None or not result.success:
            break
    return result
