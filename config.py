"""Server configuration and logging setup.

Settings are read from environment variables (optionally from a ``.env``
file) into an immutable ``ServerConfig``. ``get_config()`` caches the
result so the whole process shares one configuration.

Environment variables:
    KB_HOST: Bind address (default: 0.0.0.0).
    KB_PORT: TCP port (default: 3000).
    KB_ASSET_ROOT: Directory static assets are served from
        (default: the ``static`` directory next to this file).
    KB_LOG_LEVEL: Logging level name (default: INFO).
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_ASSET_ROOT = Path(__file__).resolve().parent / "static"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class ServerConfig:
    """Immutable settings for the file server.

    Attributes:
        host: Address uvicorn binds to.
        port: TCP port the server listens on.
        asset_root: Directory the named pages and static files resolve against.
        log_level: Name of the stdlib logging level.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    asset_root: Path = field(default=DEFAULT_ASSET_ROOT)
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {self.port}")

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from ``KB_*`` environment variables.

        Returns:
            A ServerConfig with defaults for any unset variable.

        Raises:
            ValueError: If KB_PORT is not a valid port number.
        """
        raw_port = os.getenv("KB_PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"KB_PORT must be an integer, got {raw_port!r}") from None

        asset_root = os.getenv("KB_ASSET_ROOT")

        return cls(
            host=os.getenv("KB_HOST", DEFAULT_HOST),
            port=port,
            asset_root=Path(asset_root) if asset_root else DEFAULT_ASSET_ROOT,
            log_level=os.getenv("KB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


@lru_cache(maxsize=1)
def get_config() -> ServerConfig:
    """Return the process-wide configuration, loading ``.env`` on first use."""
    load_dotenv()
    return ServerConfig.from_env()


def setup_logging(config: ServerConfig | None = None) -> None:
    """Configure stdlib logging to write to standard output.

    Call this once at startup. Safe to call again; existing handlers are
    replaced.

    Args:
        config: Config to read the level from (defaults to ``get_config()``).
    """
    cfg = config or get_config()
    level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logger.debug("Logging configured at %s", logging.getLevelName(level))
