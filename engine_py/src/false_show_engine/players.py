"""Player identity helpers: ids, names and avatars."""

import random
import uuid
from typing import Any, Dict, Iterable, Optional

AVATARS = ['👤', '🧑', '👨', '👩', '🧔', '👱', '👶', '🧓', '👮', '🧑‍🚀', '🦸', '🧙']

BOT_NAMES = [
    'Ace', 'Blaze', 'Cleo', 'Dash', 'Echo', 'Finn',
    'Gus', 'Hazel', 'Iris', 'Jax', 'Kira', 'Luna',
]


def new_player_id() -> str:
    return str(uuid.uuid4())[:8]


def random_avatar(rng: random.Random) -> str:
    return rng.choice(AVATARS)


def random_bot_name(rng: random.Random, taken: Iterable[str] = ()) -> str:
    """Pick a bot name not already in ``taken``, numbering it if all are used."""
    taken = set(taken)
    free = [name for name in BOT_NAMES if name not in taken]
    if free:
        return rng.choice(free)
    base = rng.choice(BOT_NAMES)
    suffix = 2
    while f"{base} {suffix}" in taken:
        suffix += 1
    return f"{base} {suffix}"


def create_player_info(
    name: Optional[str] = None,
    rng: Optional[random.Random] = None,
    is_bot: bool = False,
    taken_names: Iterable[str] = (),
) -> Dict[str, Any]:
    """Build the player dict accepted by ``FalseShowEngine.initialize``."""
    rng = rng or random.Random()
    if name is None:
        name = random_bot_name(rng, taken_names) if is_bot else 'Player'
    return {
        "id": new_player_id(),
        "name": name,
        "avatar": random_avatar(rng),
        "score": 0,
        "is_bot": is_bot,
    }
