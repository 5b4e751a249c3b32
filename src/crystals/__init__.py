"""Crystals & Dragons: a maze crawl over Gemini."""

import sys

from .app import create_app
from .config import Config
from .engine.generator import MazeConfigurationError
from .logging import configure_logging, get_logger

__all__ = ["main", "create_app", "Config"]


def _as_str(path) -> str | None:
    return str(path) if path else None


def main() -> None:
    """Start the capsule, refusing settings that cannot produce a maze."""
    config = Config.from_env()
    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        hash_fingerprints=config.hash_fingerprints,
    )
    logger = get_logger(__name__)

    try:
        app = create_app(config)
    except MazeConfigurationError as exc:
        logger.error("invalid_configuration", error=str(exc))
        sys.exit(2)

    logger.info(
        "capsule_listening",
        host=config.host,
        port=config.port,
        room_count=config.room_count,
        max_games=config.max_games,
        tls=config.certfile is not None,
    )
    app.run(
        host=config.host,
        port=config.port,
        certfile=_as_str(config.certfile),
        keyfile=_as_str(config.keyfile),
    )
