"""Configuration and logging setup for the NEM SDK.

Settings are read from environment variables with the ``NEM_`` prefix
or from a ``.env`` file. Only the transport layer consumes them; the
transaction pipeline itself takes everything as arguments.
"""

import logging
import sys

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nem_sdk.types import Network


class NemSettings(BaseSettings):
    """Settings for talking to a NIS node.

    All settings can be configured via environment variables with the NEM_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    network: Network = Field(
        default=Network.TESTNET,
        description="NEM network transactions are built for",
    )
    node_url: str = Field(
        default="http://127.0.0.1:7890",
        description="Base URL of the NIS node",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    default_ttl: int = Field(
        default=3600,
        ge=1,
        description="Transaction time-to-live in seconds when none is given",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Route structlog through stdlib logging at *level*."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
