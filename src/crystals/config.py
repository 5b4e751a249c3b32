"""Configuration for Crystals & Dragons."""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    # Rooms in each newly started maze
    room_count: int = 16
    # Games held in memory before the least recently played is dropped
    max_games: int = 1000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from CRYSTALS_* environment variables."""
        certfile = os.getenv("CRYSTALS_CERTFILE")
        keyfile = os.getenv("CRYSTALS_KEYFILE")
        log_file = os.getenv("CRYSTALS_LOG_FILE")

        return cls(
            host=os.getenv("CRYSTALS_HOST", cls.host),
            port=int(os.getenv("CRYSTALS_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            log_level=os.getenv("CRYSTALS_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_env_flag("CRYSTALS_JSON_LOGS", False),
            hash_fingerprints=_env_flag("CRYSTALS_HASH_FINGERPRINTS", True),
            room_count=int(os.getenv("CRYSTALS_ROOM_COUNT", str(cls.room_count))),
            max_games=int(os.getenv("CRYSTALS_MAX_GAMES", str(cls.max_games))),
        )
