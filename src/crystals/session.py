"""In-memory games, one per client certificate.

Games live only as long as the process; nothing is written to disk. xitzin
runs plain ``def`` handlers on worker threads, so the registry and each game
are guarded by locks.
"""

import threading
from collections import OrderedDict
from collections.abc import Callable

from .engine.game import GameEngine
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_GAMES = 1000


class GameRegistry:
    """Maps certificate fingerprints to running games.

    At most ``max_games`` games are held. Starting one more drops the game
    that was played least recently.
    """

    def __init__(
        self,
        room_count: int,
        engine_factory: Callable[[int], GameEngine] = GameEngine,
        max_games: int = DEFAULT_MAX_GAMES,
    ):
        if max_games < 1:
            raise ValueError(f"max_games must be at least 1, got {max_games}")
        self.room_count = room_count
        self.engine_factory = engine_factory
        self.max_games = max_games
        self._games: OrderedDict[str, GameEngine] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, fingerprint: str) -> bool:
        return fingerprint in self._games

    def get_or_create(self, fingerprint: str) -> GameEngine:
        """Return the player's game, starting a fresh one on first visit."""
        with self._lock:
            game = self._games.get(fingerprint)
            if game is None:
                return self._start(fingerprint)
            self._games.move_to_end(fingerprint)
        logger.debug("game_resumed", fingerprint=fingerprint)
        return game

    def new_game(self, fingerprint: str) -> GameEngine:
        """Throw away any current game and start over."""
        with self._lock:
            return self._start(fingerprint)

    def _start(self, fingerprint: str) -> GameEngine:
        # Caller holds self._lock
        game = self.engine_factory(self.room_count)
        replaced = self._games.pop(fingerprint, None) is not None
        self._games[fingerprint] = game
        while len(self._games) > self.max_games:
            evicted, _ = self._games.popitem(last=False)
            logger.info("game_evicted", fingerprint=evicted, games=len(self._games))
        logger.info(
            "game_reset" if replaced else "new_game_started",
            fingerprint=fingerprint,
            rooms=self.room_count,
        )
        return game
