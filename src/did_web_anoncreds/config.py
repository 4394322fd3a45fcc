"""Registry configuration."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOGGER = logging.getLogger(__name__)

CAMEL_CASE_NAMES = {
    "allowCaching": "allow_caching",
    "cacheDurationInSeconds": "cache_duration_in_seconds",
}


class ConfigFileNotFoundError(Exception):
    """Raised on configuration file not found."""


class CacheSettings(BaseSettings):
    """Caching behavior shared by all resource kinds.

    Environment variables are read only with the DID_WEB_ANONCREDS_ prefix;
    camelCase names are accepted from keyword arguments and config files.
    """

    model_config = SettingsConfigDict(
        env_prefix="DID_WEB_ANONCREDS_",
        env_file=".env",
        extra="ignore",
    )

    allow_caching: bool = True
    cache_duration_in_seconds: int = Field(300, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _from_camel_case(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for camel, snake in CAMEL_CASE_NAMES.items():
            if camel in data:
                data[snake] = data.pop(camel)
        return data

    @classmethod
    def from_config_file(cls, path: Path | str) -> "CacheSettings":
        """Load from the [cache] table of a TOML config file."""
        if isinstance(path, str):
            path = Path(path)

        if not path.is_file():
            raise ConfigFileNotFoundError(f"Could not find {path}")

        LOGGER.debug("Loading cache config from %s", path)
        with path.open("rb") as f:
            raw = tomllib.load(f)

        return cls.model_validate(raw.get("cache", {}))
