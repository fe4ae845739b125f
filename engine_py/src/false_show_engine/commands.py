"""
Inbound command models and dispatch onto the engine.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .cards import Card
from .constants import MAX_PLAYERS, MIN_PLAYERS
from .engine import EngineResult, FalseShowEngine


class CommandType(str, Enum):
    """Inbound command types."""
    INITIALIZE = "initialize"
    START_ROUND = "start_round"
    PLAY = "play"
    SHOW = "show"
    PENALTY_CHOICE = "penalty_choice"


class CardModel(BaseModel):
    """Card as it travels on the wire."""
    suit: Literal['spades', 'hearts', 'diamonds', 'clubs']
    rank: Literal['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']

    def to_card(self) -> Card:
        return Card(suit=self.suit, rank=self.rank)


class PlayerSeat(BaseModel):
    """Player entry for the initialize command."""
    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=30)
    avatar: str = '👤'
    score: int = Field(default=0, ge=0)
    is_bot: bool = False


class BaseCommand(BaseModel):
    """Base command model."""
    type: CommandType


class InitializeCommand(BaseCommand):
    """Seat players and configure the game."""
    type: CommandType = CommandType.INITIALIZE
    players: List[PlayerSeat] = Field(..., min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    settings: Dict[str, Any] = Field(default_factory=dict)


class StartRoundCommand(BaseCommand):
    """Deal a new round."""
    type: CommandType = CommandType.START_ROUND


class PlayCardsCommand(BaseCommand):
    """Discard cards."""
    type: CommandType = CommandType.PLAY
    player_id: str = Field(..., min_length=1)
    cards: List[CardModel] = Field(..., min_length=1, max_length=13)


class CallShowCommand(BaseCommand):
    """Call Show."""
    type: CommandType = CommandType.SHOW
    player_id: str = Field(..., min_length=1)


class PenaltyChoiceCommand(BaseCommand):
    """Resolve a pending penalty."""
    type: CommandType = CommandType.PENALTY_CHOICE
    player_id: str = Field(..., min_length=1)
    choice: Literal['deck', 'pickup']


# Union type for all inbound commands
InboundCommand = Union[
    InitializeCommand,
    StartRoundCommand,
    PlayCardsCommand,
    CallShowCommand,
    PenaltyChoiceCommand,
]


def parse_command(data: Dict[str, Any]) -> InboundCommand:
    """
    Parse raw command data into the appropriate command model.

    Args:
        data: Raw command data from a UI or network-replay layer

    Returns:
        Parsed command model

    Raises:
        ValueError: If the command type is invalid or data is malformed
    """
    command_type = data.get("type")

    if not command_type:
        raise ValueError("Missing command type")

    try:
        command_type = CommandType(command_type)
    except ValueError:
        raise ValueError(f"Invalid command type: {command_type}") from None

    command_map = {
        CommandType.INITIALIZE: InitializeCommand,
        CommandType.START_ROUND: StartRoundCommand,
        CommandType.PLAY: PlayCardsCommand,
        CommandType.SHOW: CallShowCommand,
        CommandType.PENALTY_CHOICE: PenaltyChoiceCommand,
    }

    command_class = command_map[command_type]
    try:
        return command_class(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid command data: {str(e)}") from e


def apply_command(engine: FalseShowEngine, command: InboundCommand) -> Optional[EngineResult]:
    """Run a parsed command against the engine and return its result."""
    if isinstance(command, InitializeCommand):
        return engine.initialize(
            [seat.model_dump() for seat in command.players],
            command.settings or None,
        )
    if isinstance(command, StartRoundCommand):
        return engine.start_new_round()
    if isinstance(command, PlayCardsCommand):
        return engine.play_cards(command.player_id, [c.to_card() for c in command.cards])
    if isinstance(command, CallShowCommand):
        return engine.call_show(command.player_id)
    if isinstance(command, PenaltyChoiceCommand):
        return engine.handle_penalty_choice(command.player_id, command.choice)
    return None
