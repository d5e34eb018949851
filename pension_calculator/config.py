import json
import os
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pension_calculator.core.messages import Language
from pension_calculator.errors import ConfigurationError

# key under which the active AppConfig is stored in app.config
CONFIG_KEY = "PENSION_CALCULATOR"


class AppConfig(BaseModel):
    """Runtime settings for the API."""

    model_config = ConfigDict(extra="forbid")

    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Front-end origins allowed to call /api/*.",
    )
    default_language: Language = Field("de", description="Used when a request names no language.")
    advisory_blocks: bool = Field(
        True,
        description="Treat the occupational pension notice as a blocking input error.",
    )
    log_level: str = Field("INFO")
    log_file: Optional[str] = Field(None, description="Optional rotating log file.")
    share_base_url: Optional[str] = Field(
        None, description="Base URL used for share links when a request sends none."
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @field_validator("cors_origins")
    @classmethod
    def _warn_wildcard(cls, value: List[str]) -> List[str]:
        if "*" in value:
            logger.warning("CORS allows every origin; use this for local development only.")
        return value


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the configuration dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read config file '{file_path}': {e}") from e


def load_app_config(file_path: Optional[str] = None) -> AppConfig:
    """Build an :class:`AppConfig`; without a path the defaults apply."""
    if file_path is None:
        return AppConfig()
    raw = load_config_from_json(file_path)
    try:
        return AppConfig.model_validate(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration in '{file_path}': {e}") from e
