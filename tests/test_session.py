"""Tests for the in-memory game registry."""

import random
import threading
import time

import pytest

from crystals.engine.game import GameEngine
from crystals.engine.generator import MazeGenerator
from crystals.engine.world import Item, ItemType
from crystals.session import GameRegistry


def _seeded_engine(room_count: int) -> GameEngine:
    return GameEngine(room_count, generator=MazeGenerator(rng=random.Random(0)))


def _run_together(target, count: int = 8) -> None:
    """Start ``count`` threads on ``target`` at once and wait for all of them."""
    barrier = threading.Barrier(count)

    def worker():
        barrier.wait()
        target()

    threads = [threading.Thread(target=worker) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)


def test_same_fingerprint_same_game():
    registry = GameRegistry(room_count=9, engine_factory=_seeded_engine)
    game = registry.get_or_create("abc")
    assert registry.get_or_create("abc") is game
    assert "abc" in registry
    assert len(registry) == 1


def test_players_get_separate_games():
    registry = GameRegistry(room_count=9, engine_factory=_seeded_engine)
    assert registry.get_or_create("abc") is not registry.get_or_create("def")
    assert len(registry) == 2


def test_new_game_replaces_old_one():
    registry = GameRegistry(room_count=9, engine_factory=_seeded_engine)
    old = registry.get_or_create("abc")
    new = registry.new_game("abc")
    assert new is not old
    assert registry.get_or_create("abc") is new
    assert new.state.maze.room_count == 9


def test_simultaneous_first_visits_share_one_game():
    created = []

    def slow_engine(room_count: int) -> GameEngine:
        time.sleep(0.05)
        game = _seeded_engine(room_count)
        created.append(game)
        return game

    registry = GameRegistry(room_count=9, engine_factory=slow_engine)
    seen = []
    _run_together(lambda: seen.append(registry.get_or_create("abc")), count=2)

    assert len(created) == 1
    assert seen == [created[0], created[0]]
    assert len(registry) == 1


def test_simultaneous_commands_apply_one_at_a_time():
    game = _seeded_engine(9)
    game.state.player.steps_left = 100
    game.state.player.inventory.append(Item(ItemType.FOOD))
    outputs = []
    _run_together(lambda: outputs.append(game.handle("eat food")))

    assert len(outputs) == 8
    assert [o.text for o in outputs].count("You ate some food. Steps increased!") == 1
    assert game.state.player.inventory == []
    assert game.state.turns == 8
    assert game.state.player.steps_left == 100 - 8 + 5


def test_least_recently_played_game_is_dropped():
    registry = GameRegistry(room_count=9, engine_factory=_seeded_engine, max_games=2)
    first = registry.get_or_create("a")
    registry.get_or_create("b")
    assert registry.get_or_create("a") is first

    registry.get_or_create("c")
    assert len(registry) == 2
    assert "a" in registry
    assert "b" not in registry
    assert "c" in registry


def test_dropped_player_starts_over():
    registry = GameRegistry(room_count=9, engine_factory=_seeded_engine, max_games=1)
    old = registry.get_or_create("a")
    registry.get_or_create("b")
    assert registry.get_or_create("a") is not old
    assert len(registry) == 1


def test_max_games_must_be_positive():
    with pytest.raises(ValueError):
        GameRegistry(room_count=9, max_games=0)
