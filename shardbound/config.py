"""
Server Configuration

Settings for the match server, overridable from the environment.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os


DEFAULT_CARD_DB = Path(__file__).parent / "data" / "cards.json"


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class ServerConfig:
    """Configuration for the match server."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    log_level: str = "INFO"

    # Card database used to deal decks for new matches
    card_db_path: Path = DEFAULT_CARD_DB
    deck_size: int = 12

    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Create config from environment variables."""
        config = cls()

        if os.environ.get("SHARDBOUND_HOST"):
            config.host = os.environ["SHARDBOUND_HOST"]
        if os.environ.get("SHARDBOUND_PORT"):
            config.port = int(os.environ["SHARDBOUND_PORT"])
        if os.environ.get("SHARDBOUND_RELOAD"):
            config.reload = os.environ["SHARDBOUND_RELOAD"].lower() in ("1", "true", "yes")
        if os.environ.get("SHARDBOUND_LOG_LEVEL"):
            config.log_level = os.environ["SHARDBOUND_LOG_LEVEL"].upper()
        if os.environ.get("SHARDBOUND_CARD_DB"):
            config.card_db_path = Path(os.environ["SHARDBOUND_CARD_DB"])
        if os.environ.get("SHARDBOUND_DECK_SIZE"):
            config.deck_size = int(os.environ["SHARDBOUND_DECK_SIZE"])
        if os.environ.get("SHARDBOUND_CORS_ORIGINS"):
            config.cors_origins = _split_origins(os.environ["SHARDBOUND_CORS_ORIGINS"])

        return config


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration."""
    global _config
    _config = config
