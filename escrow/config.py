"""
Escrow service configuration, read from the environment.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_UNIT = 1000
DEFAULT_PORT = 5000


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class EscrowConfig:
    """Escrow service configuration."""
    key_file: Optional[str] = None
    unit: int = DEFAULT_UNIT
    identifier_length: int = 32
    min_key_bits: int = 2048
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    refused_recipients: List[str] = field(default_factory=list)
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_env(cls, environ=None) -> "EscrowConfig":
        env = os.environ if environ is None else environ
        refused = env.get("ESCROW_REFUSED_RECIPIENTS", "")
        return cls(
            key_file=env.get("ESCROW_KEY_FILE"),
            unit=int(env.get("ESCROW_UNIT", DEFAULT_UNIT)),
            identifier_length=int(env.get("ESCROW_IDENTIFIER_LENGTH", 32)),
            min_key_bits=int(env.get("ESCROW_MIN_KEY_BITS", 2048)),
            host=env.get("ESCROW_HOST", "127.0.0.1"),
            port=int(env.get("ESCROW_PORT", DEFAULT_PORT)),
            refused_recipients=[r.strip() for r in refused.split(",") if r.strip()],
            log=LogConfig(
                level=env.get("ESCROW_LOG_LEVEL", "INFO"),
                file=env.get("ESCROW_LOG_FILE"),
            ),
        )


def client_url(environ=None) -> str:
    env = os.environ if environ is None else environ
    return env.get("ESCROW_URL", "http://localhost:%d" % DEFAULT_PORT).rstrip("/")


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
