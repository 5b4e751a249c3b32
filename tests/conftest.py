"""Shared test fixtures for Crystals & Dragons."""

from dataclasses import replace

import pytest

from crystals.app import create_app
from crystals.config import Config
from crystals.engine.direction import Direction
from crystals.engine.game import GameEngine
from crystals.engine.world import Maze


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def connect(maze: Maze, pos: tuple[int, int], direction: Direction) -> None:
    """Open a door both ways between pos and its neighbour."""
    here = maze.room(*pos)
    there = maze.room(pos[0] + direction.dx, pos[1] + direction.dy)
    maze.update_room(replace(here, doors=here.doors | {direction}))
    maze.update_room(replace(there, doors=there.doors | {direction.inverse}))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def corridor() -> Maze:
    """Three empty rooms in a row, (0,0) - (1,0) - (2,0)."""
    maze = Maze.blank(3, 1)
    connect(maze, (0, 0), Direction.EAST)
    connect(maze, (1, 0), Direction.EAST)
    return maze


@pytest.fixture
def place(corridor: Maze):
    """Change fields of a corridor room, e.g. place((1, 0), monster=...)."""

    def _place(pos: tuple[int, int], **changes) -> None:
        corridor.update_room(replace(corridor.room(*pos), **changes))

    return _place


@pytest.fixture
def engine(corridor: Maze, clock: FakeClock) -> GameEngine:
    return GameEngine(maze=corridor, clock=clock)


@pytest.fixture
def test_config() -> Config:
    return Config(room_count=9)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
