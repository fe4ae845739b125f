"""
Tests for bot candidate generation, tier strategies and the bot runner.
"""

import asyncio
import random

import pytest
from false_show_engine.bots import HeuristicBot, find_all_valid_plays
from false_show_engine.bots.runner import execute_bot_turn, next_actor, run_bot_round
from false_show_engine.engine import FalseShowEngine
from false_show_engine.hand import Hand
from false_show_engine.rules import create_settings
from false_show_engine.validate import is_safe_play, validate_play


class FixedRandom:
    """Stand-in RNG returning a fixed roll."""

    def __init__(self, roll):
        self.roll = roll

    def random(self):
        return self.roll

    def choice(self, seq):
        return seq[0]


def _hand(cards, codes):
    hand = Hand(cards(codes))
    hand.sort()
    return hand


def _game_state(cards, last_play=None, opponent_sizes=(5,), pending=None, joker=None):
    return {
        "players": [
            {"id": "me", "hand_size": 0, "is_eliminated": False},
        ] + [
            {"id": f"opp{i}", "hand_size": size, "is_eliminated": False}
            for i, size in enumerate(opponent_sizes)
        ],
        "current_player": "me",
        "last_play": {"cards": [c.to_dict() for c in cards(last_play)]} if last_play else None,
        "pending_penalty": pending,
        "joker": joker.to_dict() if joker else None,
    }


def test_candidates_cover_singles_pairs_and_runs(cards):
    plays = find_all_valid_plays(_hand(cards, "3H 4H 5H 5S"), None)

    by_type = {}
    for play in plays:
        by_type.setdefault(play.type, []).append(play.cards)
    assert len(by_type["single"]) == 4
    assert by_type["pair"] == [cards("5S 5H")]
    assert by_type["sequence"] == [cards("3H 4H 5H")]


def test_candidates_are_all_legal(cards, card):
    """Test every enumerated candidate passes play validation as its own type."""
    joker = card("KS")
    plays = find_all_valid_plays(_hand(cards, "3H 4H KS 5H 5S 9D"), joker)

    assert any(p.type == "sequence" and joker in p.cards for p in plays)
    for play in plays:
        result = validate_play(play.cards, joker)
        assert result.valid
        assert result.play_type == play.type


def test_candidate_value_counts_joker_as_zero(cards, card):
    plays = find_all_valid_plays(_hand(cards, "9D KS"), card("KS"))
    pair = next(p for p in plays if p.type == "pair")
    assert pair.value == 9


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        HeuristicBot("me", difficulty="impossible")


@pytest.mark.parametrize("difficulty, hand_value, cards_left, expected", [
    ("easy", 5, 2, True),
    ("easy", 6, 2, False),
    ("easy", 5, 3, False),
    ("medium", 3, 5, True),
    ("medium", 8, 2, True),
    ("medium", 9, 2, False),
    ("medium", 8, 3, False),
    ("medium", 3, 6, False),
    ("hard", 0, 4, True),
    ("hard", 5, 3, True),
    ("hard", 10, 1, True),
    ("hard", 6, 4, False),
])
def test_show_thresholds(cards, difficulty, hand_value, cards_left, expected):
    bot = HeuristicBot("me", difficulty=difficulty, rng=FixedRandom(0.99))
    state = _game_state(cards, opponent_sizes=(2,))
    assert bot.should_call_show(state, hand_value, cards_left) == expected


def test_hard_bot_bluffs_against_large_hands(cards):
    """Test the hard tier sometimes calls Show on a middling hand when opponents hold many cards."""
    loaded = _game_state(cards, opponent_sizes=(5, 6))
    assert HeuristicBot("me", "hard", rng=FixedRandom(0.05)).should_call_show(loaded, 12, 3)
    assert not HeuristicBot("me", "hard", rng=FixedRandom(0.5)).should_call_show(loaded, 12, 3)

    light = _game_state(cards, opponent_sizes=(2, 3))
    assert not HeuristicBot("me", "hard", rng=FixedRandom(0.05)).should_call_show(light, 12, 3)


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_lone_joker_calls_show(cards, card, difficulty):
    bot = HeuristicBot("me", difficulty=difficulty, rng=FixedRandom(0.99))
    action = bot.choose_action(_game_state(cards, last_play="7S"), _hand(cards, "QH"), card("QH"))
    assert action.type == "show"


def test_easy_bot_plays_safe_when_it_can(cards):
    bot = HeuristicBot("me", difficulty="easy", rng=random.Random(3))
    for _ in range(10):
        action = bot.choose_action(_game_state(cards, last_play="7S"), _hand(cards, "2C 7H 7D 9D"), None)
        assert action.type == "play"
        assert is_safe_play(action.cards, cards("7S"))


def test_medium_bot_prefers_safe_play(cards):
    bot = HeuristicBot("me", difficulty="medium")
    action = bot.choose_action(_game_state(cards, last_play="7S"), _hand(cards, "2C 7H 9D KC"), None)
    assert action.type == "play"
    assert action.cards == cards("7H")


def test_medium_bot_dumps_highest_value_when_nothing_is_safe(cards):
    bot = HeuristicBot("me", difficulty="medium")
    action = bot.choose_action(_game_state(cards, last_play="7S"), _hand(cards, "2C 9D KC"), None)
    assert action.cards == cards("KC")


def test_medium_bot_holds_joker_with_large_hand(cards, card):
    """Test the medium tier avoids spending the joker while holding more than five cards."""
    bot = HeuristicBot("me", difficulty="medium")
    action = bot.choose_action(
        _game_state(cards, last_play="9S"),
        _hand(cards, "2C 3D 5S 8D KC QH"),
        card("QH"),
    )
    assert action.cards == cards("KC")


def test_hard_bot_endgame_sheds_heaviest_play(cards):
    bot = HeuristicBot("me", difficulty="hard", rng=FixedRandom(0.99))
    action = bot.choose_action(_game_state(cards, last_play="5S"), _hand(cards, "2C 9D 9H"), None)
    assert action.type == "play"
    assert set(action.cards) == set(cards("9D 9H"))


def test_hard_bot_favours_long_runs(cards):
    bot = HeuristicBot("me", difficulty="hard", rng=FixedRandom(0.99))
    action = bot.choose_action(_game_state(cards, last_play="6S"), _hand(cards, "3H 4H 5H 9C KD"), None)
    assert action.cards == cards("3H 4H 5H")


def test_choose_penalty(cards, card):
    """Test deck versus pickup: heavy or missing previous plays and large hands draw from the deck."""
    bot = HeuristicBot("me")

    def pending(codes):
        return {"player_id": "me", "previous_play": {"cards": [c.to_dict() for c in cards(codes)]}}

    small_hand = _hand(cards, "2C 3C 4C")
    big_hand = _hand(cards, "2C 3C 4C 5C 6C 7C 8C")

    assert bot.choose_penalty(_game_state(cards, pending=pending("KS")), small_hand) == "deck"
    assert bot.choose_penalty(_game_state(cards, pending=pending("2S")), small_hand) == "pickup"
    assert bot.choose_penalty(_game_state(cards, pending=pending("2S")), big_hand) == "deck"
    assert bot.choose_penalty(_game_state(cards), small_hand) == "deck"
    assert bot.choose_penalty(_game_state(cards, pending=pending("KS"), joker=card("KS")), small_hand) == "pickup"


def test_make_play_waits_then_decides(cards):
    bot = HeuristicBot("me", difficulty="medium", thinking_time=0)
    state = _game_state(cards, last_play="7S")
    hand = _hand(cards, "2C 7H 9D KC")

    action = asyncio.run(bot.make_play(state, hand, None))
    assert action == bot.choose_action(state, hand, None)


def test_execute_bot_turn_resolves_penalty(rigged_engine, cards):
    engine = rigged_engine(["2D 9C", "3S 4S", "5H"], last_play="7S", deck="KH", penalty_mode="choice")
    engine.play_cards("p0", cards("2D"))

    result = asyncio.run(execute_bot_turn(engine, HeuristicBot("p0", thinking_time=0)))
    assert result.success
    assert result["choice"] == "pickup"
    assert engine.state.pending_penalty is None
    assert next_actor(engine) == "p1"


def test_execute_bot_turn_waits_for_its_turn(rigged_engine):
    engine = rigged_engine(["7H 9C", "2S 3S", "4D 5D"], last_play="7S")
    result = asyncio.run(execute_bot_turn(engine, HeuristicBot("p1", thinking_time=0)))
    assert result is None
    assert engine.get_hand("p1").size() == 2


def test_run_bot_round_stops_at_human(new_engine):
    """Test bots act until a human is up or the round ends."""
    engine = new_engine(3)
    engine.start_new_round()
    bots = {pid: HeuristicBot(pid, "medium", thinking_time=0) for pid in ("p1", "p2")}

    asyncio.run(run_bot_round(engine, bots))

    assert engine.state.phase != "playing" or next_actor(engine) == "p0"


def test_bots_play_a_full_game():
    """Test a bot-only game runs to game over with every action accepted."""
    engine = FalseShowEngine(create_settings(seed=5, score_limit=40))
    difficulties = ["easy", "medium", "hard"]
    players = [{"id": f"bot{i}", "name": f"Bot {i}", "is_bot": True} for i in range(3)]
    assert engine.initialize(players).success
    bots = {
        p["id"]: HeuristicBot(p["id"], difficulty, thinking_time=0, rng=random.Random(i))
        for i, (p, difficulty) in enumerate(zip(players, difficulties))
    }

    previous_scores = {p["id"]: 0 for p in players}
    eliminated = set()
    for _ in range(200):
        if engine.state.phase == "gameOver":
            break
        assert engine.start_new_round().success

        result = asyncio.run(run_bot_round(engine, bots))
        assert result.success
        assert engine.state.phase in ("roundEnd", "gameOver")
        assert engine.card_count() == 52

        for player in engine.state.players:
            assert player.score >= previous_scores[player.id]
            previous_scores[player.id] = player.score
            if player.id in eliminated:
                assert player.is_eliminated
            if player.is_eliminated:
                eliminated.add(player.id)

    assert engine.state.phase == "gameOver"
    assert len(engine.get_active_players()) == 1
    assert all(engine.get_player(pid).score >= 40 for pid in eliminated)
