"""Xitzin application factory for Crystals & Dragons."""

from pathlib import Path

from xitzin import Xitzin

from .config import Config
from .engine.generator import MIN_ROOMS, MazeConfigurationError
from .logging import get_logger
from .session import GameRegistry

logger = get_logger(__name__)


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()
    if config.room_count < MIN_ROOMS:
        raise MazeConfigurationError(
            f"CRYSTALS_ROOM_COUNT must be at least {MIN_ROOMS}, got {config.room_count}"
        )

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Crystals & Dragons",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    app.state.config = config
    app.state.games = GameRegistry(
        room_count=config.room_count, max_games=config.max_games
    )

    @app.on_startup
    async def startup():
        logger.info(
            "startup_complete",
            room_count=config.room_count,
            max_games=config.max_games,
        )

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app
