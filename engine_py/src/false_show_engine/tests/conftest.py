"""
Shared fixtures for the False Show engine tests.
"""

import pytest

from false_show_engine.cards import Card
from false_show_engine.constants import DEALER_ID, PLAY_PAIR, PLAY_SINGLE
from false_show_engine.engine import FalseShowEngine
from false_show_engine.hand import Hand
from false_show_engine.models import Play
from false_show_engine.rules import create_settings

SUIT_CODES = {'S': 'spades', 'H': 'hearts', 'D': 'diamonds', 'C': 'clubs'}


def parse_card(code: str) -> Card:
    """``"7S"`` -> 7 of spades, ``"10H"`` -> 10 of hearts."""
    return Card(suit=SUIT_CODES[code[-1]], rank=code[:-1])


def parse_cards(codes: str):
    return [parse_card(code) for code in codes.split()]


@pytest.fixture
def card():
    return parse_card


@pytest.fixture
def cards():
    return parse_cards


@pytest.fixture
def new_engine():
    """Initialized engine with ``count`` players named p0..pN, not yet dealt."""
    def build(count=3, **settings):
        engine = FalseShowEngine(create_settings(seed=settings.pop('seed', 42), **settings))
        players = [{"id": f"p{i}", "name": f"Player {i}"} for i in range(count)]
        result = engine.initialize(players)
        assert result.success
        return engine
    return build


@pytest.fixture
def rigged_engine(new_engine):
    """
    Engine mid-round with hand-picked cards.

    ``hands`` holds one card string per player, ``last_play`` the cards on the
    table (played by the dealer) and ``deck`` the draw pile, top card last.
    """
    def build(hands, last_play=None, joker=None, current=0, deck=None, **settings):
        engine = new_engine(len(hands), **settings)
        assert engine.start_new_round().success

        state = engine.state
        for player, codes in zip(state.players, hands):
            player.hand = Hand(parse_cards(codes))
            player.hand.sort()
        state.joker_card = parse_card(joker) if joker else None
        state.current_player_index = current
        state.played_cards = []
        state.last_play = None
        if last_play:
            table = parse_cards(last_play)
            state.last_play = Play(player_id=DEALER_ID, cards=table, type=PLAY_SINGLE if len(table) == 1 else PLAY_PAIR)
            state.played_cards = list(table)
        if deck is not None:
            state.deck.cards = parse_cards(deck) if deck else []
        return engine
    return build
