"""Configuration management for the Electricity Maps client."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"
BASE_URL = "https://api.electricitymap.org/v3"
TOKEN_ENV_VAR = "ELECTRICITYMAP_API_TOKEN"
PLACEHOLDER_TOKEN = "your-electricitymap-api-token-here"


class ClientConfig(BaseModel):
    """Connection settings for the Electricity Maps API."""

    api_token: Optional[str] = None
    base_url: str = BASE_URL

    model_config = ConfigDict(frozen=True)

    @field_validator("api_token")
    @classmethod
    def validate_api_token(cls, v: Optional[str]) -> Optional[str]:
        """Reject the token placeholder shipped in config.example.yml."""
        if v == PLACEHOLDER_TOKEN:
            raise ValueError("Electricity Maps API token must be replaced with your actual token")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")


class Config(BaseModel):
    """Main configuration for the client and its command line."""

    electricitymap: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file, letting the environment override the token."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Copy config.example.yml to config.yml and configure your API token."
        )

    logger.info("Loading configuration from %s", config_path)

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        token = os.getenv(TOKEN_ENV_VAR)
        if token:
            section = config_data.get("electricitymap") or {}
            config_data["electricitymap"] = {**section, "api_token": token}

        return Config(**config_data)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e
