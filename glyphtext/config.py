"""Configuration for composition and for the service/CLI surfaces."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Colors accepted by the service and the CLI
HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class ComposerOptions(BaseModel):
    """Engine configuration for one document."""

    model_config = ConfigDict(frozen=True)

    nesting_depth: int = Field(
        default=1,
        ge=0,
        description="How many primary glyphs may nest inside the anchor glyph",
    )
    use_overrides: bool = Field(
        default=True,
        description="Map whole words such as 'the' to a single glyph",
    )
    scale: float = Field(
        default=1.0,
        gt=0,
        description="Uniform scale applied when emitting the document",
    )


class Settings(BaseSettings):
    log_level: str = "info"
    catalog_path: Path | None = None
    fill: str = "#000000"
    stroke: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="GLYPHTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install the console renderer, filtering below ``level``.

    Logs go to stderr so SVG written to stdout stays clean.
    """
    name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
