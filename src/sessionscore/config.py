"""Configuration management for SessionScore.

Loads settings from environment variables and .env file. Scoring thresholds
are fixed in the analysis modules and are not configurable.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Literal

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class SessionScoreConfig(BaseModel):
    """Application configuration — all from env vars or defaults."""

    data_dir: str = Field(
        default_factory=lambda: os.getenv(
            "SESSIONSCORE_DATA_DIR",
            str(Path.home() / ".sessionscore"),
        )
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("SESSIONSCORE_LOG_LEVEL", "INFO").upper()
    )
    log_format: Literal["console", "json"] = Field(
        default_factory=lambda: os.getenv("SESSIONSCORE_LOG_FORMAT", "console")  # type: ignore[arg-type]
    )

    def ensure_data_dir(self) -> Path:
        """Create data directory if it doesn't exist."""
        p = Path(self.data_dir)
        p.mkdir(parents=True, exist_ok=True)
        return p


def load_config() -> SessionScoreConfig:
    """Load configuration from environment."""
    return SessionScoreConfig()


def configure_logging(config: SessionScoreConfig) -> None:
    """Route structlog output through a level filter and the chosen renderer."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if config.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
