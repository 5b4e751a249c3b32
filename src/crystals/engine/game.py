"""The game facade handed to presentation layers."""

import threading
import time
from collections.abc import Callable

from ..logging import get_logger
from .commands import (
    GameOutput,
    describe_room,
    get_exits,
    get_inventory,
    handle_command,
)
from .generator import MazeConfigurationError, MazeGenerator
from .state import GameState, new_game_state
from .world import Maze

logger = get_logger(__name__)


class GameEngine:
    """One game: a generated maze, its player, and the turn loop.

    Build it from a room count or a square ``size`` (room count = size²),
    or hand it a ready-made maze. ``clock`` supplies the timestamps used for
    monster encounters and defaults to ``time.monotonic``.

    Commands are applied one at a time; concurrent callers wait their turn.
    """

    def __init__(
        self,
        room_count: int | None = None,
        *,
        size: int | None = None,
        maze: Maze | None = None,
        generator: MazeGenerator | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if maze is None:
            generator = generator or MazeGenerator()
            if size is not None:
                maze = generator.generate_square(size)
            elif room_count is not None:
                maze = generator.generate(room_count)
            else:
                raise MazeConfigurationError("either room_count or size is required")
        self.state: GameState = new_game_state(maze)
        self.clock = clock
        self._lock = threading.Lock()
        logger.info(
            "game_started",
            rooms=maze.room_count,
            steps=self.state.player.steps_left,
        )

    @property
    def is_game_over(self) -> bool:
        return self.state.is_game_over

    def start(self) -> GameOutput:
        """Describe the start room."""
        return self.describe()

    def handle(self, command: str) -> GameOutput:
        with self._lock:
            return handle_command(self.state, command, self.clock())

    def describe(self) -> GameOutput:
        with self._lock:
            return describe_room(self.state)

    def get_exits(self) -> list[str]:
        return get_exits(self.state)

    def get_inventory(self) -> list[str]:
        return get_inventory(self.state)
