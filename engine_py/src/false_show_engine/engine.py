"""Main game engine with the False Show rules and turn state machine"""

import logging
import random
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .cards import Card, format_cards
from .constants import (
    DEALER_ID, DEALER_NAME, JOKER_OPTION_COUNT, PENALTY_CHOICE_DECK,
    PENALTY_CHOICE_PICKUP, PENALTY_CHOICES, PENALTY_MODE_CHOICE,
    PHASE_GAME_OVER, PHASE_PLAYING, PHASE_ROUND_END, PHASE_WAITING, PLAY_SINGLE,
    cards_per_player
)
from .deck import Deck
from .errors import (
    ACTION_NOT_ALLOWED, INVALID_PLAY, INVALID_PLAYER, INVALID_SETTINGS,
    INVALID_STATE, NO_PENALTY_PENDING, NOT_YOUR_TURN, raise_error
)
from .hand import Hand
from .models import GameState, PendingPenalty, Play, Player
from .rules import GameSettings, create_settings, default_settings
from .scoring import (
    apply_eliminations, apply_scores, collect_hand_values, score_round_win,
    score_show
)
from .serialization import (
    deserialize_state, public_player, sanitize_state, serialize_state
)
from .validate import is_safe_play, validate_ownership, validate_play

logger = logging.getLogger(__name__)


class EngineResult:
    """Outcome of an engine command. Check ``success`` before reading ``data``."""

    def __init__(
        self,
        success: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None
    ):
        self.success = success
        self.error_code = error_code
        self.error_message = error_message
        self.data = data or {}

    @classmethod
    def ok(cls, **data) -> 'EngineResult':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error_code: str, error_message: str) -> 'EngineResult':
        return cls(success=False, error_code=error_code, error_message=error_message)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __repr__(self) -> str:
        if self.success:
            return f"EngineResult(success=True, data={self.data!r})"
        return f"EngineResult(success=False, error_code={self.error_code!r}, error_message={self.error_message!r})"


PlayerSeat = Union[Player, Mapping[str, Any]]


class FalseShowEngine:
    def __init__(self, settings: Optional[GameSettings] = None):
        self.settings = settings or default_settings
        self.rng = random.Random(self.settings.seed)
        self.state = GameState(deck=Deck(rng=self.rng), score_limit=self.settings.score_limit)

    # Setup

    def initialize(
        self,
        players: Sequence[PlayerSeat],
        settings: Optional[Union[GameSettings, Mapping[str, Any]]] = None
    ) -> EngineResult:
        """Seat the players and reset the game to ``waiting``."""
        if settings is not None:
            if not isinstance(settings, GameSettings):
                try:
                    settings = create_settings(**settings)
                except ValidationError as e:
                    return EngineResult.fail(INVALID_SETTINGS, f"Invalid settings: {e}")
            self.settings = settings
            self.rng = random.Random(settings.seed)

        if not self.settings.validate_player_count(len(players)):
            return EngineResult.fail(
                INVALID_SETTINGS,
                f"Need between {self.settings.min_players} and {self.settings.max_players} players"
            )

        for seat in players:
            if not isinstance(seat, Player) and not (isinstance(seat, Mapping) and seat.get("id")):
                return EngineResult.fail(INVALID_PLAYER, "Player id is required")

        seated = [self._make_player(p) for p in players]
        ids = [p.id for p in seated]
        if len(set(ids)) != len(ids):
            return EngineResult.fail(INVALID_PLAYER, "Player ids must be unique")

        self.state = GameState(
            players=seated,
            deck=Deck(rng=self.rng),
            score_limit=self.settings.score_limit,
            phase=PHASE_WAITING,
        )
        self._log(f"Game created for {', '.join(p.name for p in seated)} (score limit {self.settings.score_limit})")
        logger.info(f"Initialized game with {len(seated)} players")
        return EngineResult.ok(players=[public_player(p) for p in seated])

    def _make_player(self, seat: PlayerSeat) -> Player:
        if isinstance(seat, Player):
            return Player(
                id=seat.id, name=seat.name, avatar=seat.avatar,
                score=seat.score, is_bot=seat.is_bot,
            )
        return Player(
            id=str(seat["id"]),
            name=seat.get("name", str(seat["id"])),
            avatar=seat.get("avatar", '👤'),
            score=seat.get("score", 0) or 0,
            is_bot=seat.get("is_bot", False),
        )

    def start_new_round(self) -> EngineResult:
        state = self.state
        if not state.players:
            return EngineResult.fail(ACTION_NOT_ALLOWED, "Game has not been initialized")
        if state.phase == PHASE_PLAYING:
            return EngineResult.fail(ACTION_NOT_ALLOWED, "Round already in progress")
        if state.phase == PHASE_GAME_OVER:
            return EngineResult.fail(ACTION_NOT_ALLOWED, "Game is over")

        active = state.active_players()
        state.round_number += 1
        state.deck = Deck(rng=self.rng)
        state.deck.shuffle()
        state.played_cards = []
        state.last_play = None
        state.pending_penalty = None
        state.current_player_index = self.rng.randrange(len(active))

        for player in state.players:
            player.hand = Hand()
            player.has_drawn_penalty = False

        self._deal_cards(active)
        self._select_joker()

        # One card from the deck seeds the play area
        start_cards = state.deck.draw(1)
        state.initial_card = start_cards[0] if start_cards else None
        if state.initial_card:
            state.last_play = Play(
                player_id=DEALER_ID,
                player_name=DEALER_NAME,
                cards=[state.initial_card],
                type=PLAY_SINGLE,
                is_safe=True,
                timestamp=time.time(),
            )
            state.played_cards.append(state.initial_card)

        state.phase = PHASE_PLAYING
        current = state.current_player()
        self._log(
            f"Round {state.round_number} started! Joker is {state.joker_card}, "
            f"opening card {state.initial_card}, {current.name} goes first"
        )
        logger.info(f"Round {state.round_number} started with {len(active)} players")

        return EngineResult.ok(
            round_number=state.round_number,
            joker=state.joker_card,
            joker_options=list(state.joker_options),
            opening_card=state.initial_card,
            current_player=current.id,
            hand_sizes=self.get_hand_sizes(),
        )

    def _deal_cards(self, active: List[Player]):
        count = cards_per_player(len(active))
        for player in active:
            player.hand.add_cards(self.state.deck.draw(count))

    def _select_joker(self):
        # The dealer's choice between the two bottom cards is simplified to the first one
        options = self.state.deck.draw_bottom(JOKER_OPTION_COUNT)
        self.state.joker_options = options
        self.state.joker_card = options[0] if options else None

    # Queries

    def get_player(self, player_id: str) -> Optional[Player]:
        return self.state.get_player(player_id)

    def get_active_players(self) -> List[Player]:
        return self.state.active_players()

    def get_current_player(self) -> Optional[Player]:
        return self.state.current_player()

    def get_hand(self, player_id: str) -> Optional[Hand]:
        player = self.get_player(player_id)
        return player.hand if player else None

    def get_hand_sizes(self) -> Dict[str, int]:
        return {p.id: p.hand.size() for p in self.state.players}

    @property
    def joker_card(self) -> Optional[Card]:
        return self.state.joker_card

    @property
    def game_log(self) -> List[str]:
        return self.state.game_log

    def card_count(self) -> int:
        """Cards in the deck, all hands, the played pile and the joker options."""
        state = self.state
        return (
            state.deck.cards_remaining()
            + sum(p.hand.size() for p in state.players)
            + len(state.played_cards)
            + len(state.joker_options)
        )

    def is_joker_last_card(self, player_id: str) -> bool:
        """
        Whether the player holds only the joker.

        Such a player must either call Show or discard the joker; discarding
        it draws a replacement card.
        """
        player = self.get_player(player_id)
        if not player:
            return False
        return player.hand.size() == 1 and player.hand.has_joker(self.state.joker_card)

    def get_game_state(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        return sanitize_state(self.state, viewer_id)

    # Turn actions

    def _check_actor(self, player_id: str) -> Optional[EngineResult]:
        player = self.get_player(player_id)
        if not player or player.is_eliminated:
            return EngineResult.fail(INVALID_PLAYER, "Invalid player")
        if self.state.phase != PHASE_PLAYING:
            return EngineResult.fail(ACTION_NOT_ALLOWED, f"Game is not in play (current: {self.state.phase})")
        if self.state.pending_penalty:
            return EngineResult.fail(ACTION_NOT_ALLOWED, "Must resolve the pending penalty first")
        return None

    def play_selected(self, player_id: str) -> EngineResult:
        """Play the player's currently selected cards."""
        player = self.get_player(player_id)
        if not player:
            return EngineResult.fail(INVALID_PLAYER, "Invalid player")
        return self.play_cards(player_id, player.hand.get_selected_cards())

    def play_cards(self, player_id: str, cards: Sequence[Card]) -> EngineResult:
        """
        Discard a single, pair or sequence.

        An unsafe play (no rank shared with the previous play) costs a penalty
        card, drawn immediately or left pending for ``handle_penalty_choice``
        depending on the penalty mode.
        """
        rejected = self._check_actor(player_id)
        if rejected:
            return self._reject(player_id, rejected)

        state = self.state
        player = self.get_player(player_id)
        if state.current_player().id != player_id:
            return self._reject(player_id, EngineResult.fail(NOT_YOUR_TURN, "Not your turn"))

        cards = list(cards)
        if len(set(cards)) != len(cards):
            return self._reject(player_id, EngineResult.fail(INVALID_PLAY, "Cannot play the same card twice"))
        missing = validate_ownership(player.hand.cards, cards)
        if missing:
            return self._reject(player_id, EngineResult.fail(INVALID_PLAY, f"You don't own {missing[0]}"))

        validation = validate_play(cards, state.joker_card)
        if not validation.valid:
            return self._reject(player_id, EngineResult.fail(INVALID_PLAY, validation.error))

        joker_last = self.is_joker_last_card(player_id)
        previous_play = state.last_play
        is_safe = is_safe_play(cards, previous_play.cards if previous_play else None)

        player.hand.remove_cards(cards)
        player.hand.clear_selection()
        state.last_play = Play(
            player_id=player_id,
            player_name=player.name,
            cards=cards,
            type=validation.play_type,
            is_safe=is_safe,
            timestamp=time.time(),
        )
        state.played_cards.extend(cards)
        self._log(f"{player.name} played {validation.play_type}: {format_cards(cards)}")
        logger.info(f"{player.name} played {format_cards(cards)} ({validation.play_type}, safe={is_safe})")

        if joker_last:
            replacement = state.deck.draw(1)
            player.hand.add_cards(replacement)
            if replacement:
                self._log(f"{player.name} discarded the joker and drew a replacement")

        outcome = {
            "is_safe": is_safe,
            "penalty": not is_safe,
            "play_type": validation.play_type,
            "penalty_pending": False,
        }

        if not is_safe:
            player.has_drawn_penalty = True
            if self.settings.penalty_mode == PENALTY_MODE_CHOICE:
                state.pending_penalty = PendingPenalty(player_id=player_id, previous_play=previous_play)
                self._log(f"{player.name} made an unsafe play and must take a penalty")
                outcome["penalty_pending"] = True
                return EngineResult.ok(
                    **outcome,
                    next_player=player_id,
                    hand_sizes=self.get_hand_sizes(),
                )
            penalty_cards = state.deck.draw(1)
            if penalty_cards:
                player.hand.add_cards(penalty_cards)
                self._log(f"{player.name} made an unsafe play and drew a penalty card")
            else:
                logger.debug(f"Deck empty, penalty for {player.name} waived")

        if player.hand.is_empty():
            result = self.end_round(player_id)
            result.data.update(outcome)
            return result

        self._next_turn()
        return EngineResult.ok(
            **outcome,
            next_player=state.current_player().id,
            hand_sizes=self.get_hand_sizes(),
        )

    def handle_penalty_choice(self, player_id: str, choice: str) -> EngineResult:
        """Resolve a pending penalty by drawing from the deck or picking up the previous play."""
        state = self.state
        player = self.get_player(player_id)
        if not player or player.is_eliminated:
            return self._reject(player_id, EngineResult.fail(INVALID_PLAYER, "Invalid player"))
        pending = state.pending_penalty
        if not pending or pending.player_id != player_id:
            return self._reject(player_id, EngineResult.fail(NO_PENALTY_PENDING, "No penalty pending"))
        if choice not in PENALTY_CHOICES:
            return self._reject(player_id, EngineResult.fail(INVALID_PLAY, f"Invalid penalty choice: {choice}"))

        gained: List[Card] = []
        if choice == PENALTY_CHOICE_DECK:
            gained = state.deck.draw(1)
        elif choice == PENALTY_CHOICE_PICKUP:
            previous = pending.previous_play
            if not previous:
                return self._reject(player_id, EngineResult.fail(INVALID_PLAY, "Nothing to pick up"))
            for card in previous.cards:
                if card in state.played_cards:
                    state.played_cards.remove(card)
                    gained.append(card)

        player.hand.add_cards(gained)
        player.hand.clear_selection()
        state.pending_penalty = None
        self._log(f"{player.name} took the penalty from the {choice} ({len(gained)} card(s))")
        logger.info(f"{player.name} resolved penalty with {choice}, gained {len(gained)} card(s)")

        if player.hand.is_empty():
            result = self.end_round(player_id)
            result.data.update(choice=choice, cards_gained=len(gained))
            return result

        self._next_turn()
        return EngineResult.ok(
            choice=choice,
            cards_gained=len(gained),
            next_player=state.current_player().id,
            hand_sizes=self.get_hand_sizes(),
        )

    def call_show(self, player_id: str) -> EngineResult:
        """
        End the round claiming the lowest hand value among active players.

        A correct caller scores 0 and everyone else adds their hand value. A
        wrong caller takes the flat penalty while the true lowest hands score 0.
        """
        rejected = self._check_actor(player_id)
        if rejected:
            return self._reject(player_id, rejected)

        player = self.get_player(player_id)
        active = self.get_active_players()
        hand_values = collect_hand_values(active)
        correct, deltas = score_show(active, player_id, self.settings.wrong_show_penalty)
        apply_scores(active, deltas)

        verdict = "correctly" if correct else "wrongly"
        self._log(f"{player.name} called Show {verdict} with {player.hand.hand_value()} points")
        logger.info(f"{player.name} called Show ({verdict}); deltas {deltas}")

        return self._finish_round(
            caller=player_id,
            correct=correct,
            scores=deltas,
            hand_values=hand_values,
        )

    def end_round(self, winner_id: str) -> EngineResult:
        """End the round with ``winner_id`` having emptied their hand."""
        player = self.get_player(winner_id)
        if not player or player.is_eliminated:
            return EngineResult.fail(INVALID_PLAYER, "Invalid player")
        if self.state.phase != PHASE_PLAYING:
            return EngineResult.fail(ACTION_NOT_ALLOWED, f"Game is not in play (current: {self.state.phase})")

        active = self.get_active_players()
        hand_values = collect_hand_values(active)
        deltas = score_round_win(active, winner_id)
        apply_scores(active, deltas)
        self._log(f"{player.name} emptied their hand and wins round {self.state.round_number}!")
        logger.info(f"{player.name} won round {self.state.round_number}")

        return self._finish_round(
            round_winner=winner_id,
            scores=deltas,
            hand_values=hand_values,
        )

    def _finish_round(self, **outcome) -> EngineResult:
        state = self.state
        state.pending_penalty = None

        for player_id in apply_eliminations(state.players, state.score_limit):
            eliminated = state.get_player(player_id)
            self._log(f"{eliminated.name} reached {eliminated.score} points and is eliminated")
            logger.info(f"Player {player_id} eliminated with {eliminated.score} points")

        active = state.active_players()
        if len(active) <= 1:
            state.phase = PHASE_GAME_OVER
            winner = active[0] if active else self._lowest_scorer()
            self._log(f"Game over! {winner.name} wins")
            logger.info(f"Game over after round {state.round_number}, winner {winner.id}")
            return EngineResult.ok(**outcome, game_over=True, winner=public_player(winner))

        state.phase = PHASE_ROUND_END
        return EngineResult.ok(**outcome, game_over=False, winner=None)

    def _lowest_scorer(self) -> Player:
        # Everyone left was eliminated in the same round
        return min(self.state.players, key=lambda p: p.score)

    def _next_turn(self):
        active = self.get_active_players()
        if active:
            self.state.current_player_index = (self.state.current_player_index + 1) % len(active)

    def _reject(self, player_id: str, result: EngineResult) -> EngineResult:
        logger.warning(f"Rejected action from {player_id}: {result.error_message}")
        return result

    def _log(self, message: str):
        self.state.game_log.append(message)

    # Synchronization

    def serialize(self) -> Dict[str, Any]:
        snapshot = serialize_state(self.state)
        snapshot["settings"] = self.settings.model_dump()
        return snapshot

    def deserialize(self, data: Dict[str, Any]):
        """
        Replace the whole engine state with a snapshot from ``serialize``.

        Raises:
            GameError: If the snapshot is malformed
        """
        if isinstance(data, dict) and data.get("settings"):
            if not isinstance(data["settings"], Mapping):
                raise_error(INVALID_STATE, "Snapshot settings must be a mapping")
            try:
                self.settings = GameSettings(**data["settings"])
            except ValidationError as e:
                raise_error(INVALID_STATE, f"Invalid settings in snapshot: {e}")
            self.rng = random.Random(self.settings.seed)
        self.state = deserialize_state(data, rng=self.rng)

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> 'FalseShowEngine':
        engine = cls()
        engine.deserialize(data)
        return engine
