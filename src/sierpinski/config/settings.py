"""Configuration management for sierpinski.

Loads settings from a YAML configuration file with environment variable
overrides (``SIERPINSKI_`` prefix, ``__`` between nested keys). Supports
.env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from sierpinski.domain.models import (
    MAX_ITERATIONS_LIMIT,
    REFRESH_RATE_LIMIT_MS,
    Config,
    ScreenDimension,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/sierpinski.yaml")


class RenderConfig(BaseModel):
    max_iterations: int = Field(default=10_000, ge=1, le=MAX_ITERATIONS_LIMIT)
    refresh_rate_ms: int = Field(
        default=1, ge=0, le=REFRESH_RATE_LIMIT_MS,
        description="Delay between plotted points in milliseconds",
    )
    glyph: str = Field(default="*", min_length=1, max_length=1)
    quit_message: str = Field(default="press 'q' to quit")


class TerminalConfig(BaseModel):
    width: int | None = Field(default=None, gt=0, description="Columns; live size if unset")
    height: int | None = Field(default=None, gt=0, description="Rows; live size if unset")
    poll_interval_ms: int = Field(default=100, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the sierpinski renderer.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "SIERPINSKI_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    render: RenderConfig = Field(default_factory=RenderConfig)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Values given in the YAML file take precedence over the environment;
    anything the file leaves out falls back to env vars, then defaults.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)


def build_config(settings: Settings, screen_dim: ScreenDimension) -> Config:
    """Freeze the render settings and a screen size into a run ``Config``.

    Dimensions fixed in ``settings.terminal`` override ``screen_dim``.
    """
    term = settings.terminal
    if term.width is not None or term.height is not None:
        screen_dim = ScreenDimension(
            width=term.width if term.width is not None else screen_dim.width,
            height=term.height if term.height is not None else screen_dim.height,
        )
    return Config(
        screen_dim=screen_dim,
        max_iterations=settings.render.max_iterations,
        refresh_rate_ms=settings.render.refresh_rate_ms,
    )
