"""Settings for flowbuilder, read from the environment."""

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"
    format: str = "%(asctime)s %(name)-32s %(levelname)-8s: %(message)s"


class FlowSettings(BaseSettings):
    """
    Application configuration.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables (FLOWBUILDER_STRICT_IMPORT, FLOWBUILDER_LOGGING__LEVEL, ...)
    3. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOWBUILDER_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = LoggingSettings()

    export_basename: str = Field(
        "flow", description="File name, without extension, used on export."
    )
    export_format: Literal["json", "yaml"] = Field(
        "json", description="Default structured-text format for export."
    )
    indent: int = Field(2, ge=0, description="Indentation of exported documents.")
    strict_import: bool = Field(
        False,
        description="Reject imported documents with dangling edges or empty labels.",
    )

    @property
    def export_filename(self) -> str:
        return f"{self.export_basename}.{self.export_format}"


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> FlowSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    return FlowSettings(**overrides)


def configure_logging(settings: FlowSettings, verbose: bool = False) -> None:
    """Configure the root logger from settings."""
    level = "DEBUG" if verbose else settings.logging.level
    logging.basicConfig(level=level, format=settings.logging.format)
