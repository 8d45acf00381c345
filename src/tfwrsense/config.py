"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (TFWRSENSE__INDEXER__DEBOUNCE_MS=300)
  3. tfwrsense.yaml         (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_FILE_NAME = "tfwrsense.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("tfwrsense")


def _find_config_file() -> str | None:
    """Return the path of the first tfwrsense.yaml found, or None."""
    candidates = [
        Path(CONFIG_FILE_NAME),
        Path(_DEFAULT_CONFIG_DIR) / CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class IndexerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Quiet period after the last edit before a document is re-indexed
    debounce_ms: int = 200

    @field_validator("debounce_ms")
    @classmethod
    def validate_debounce(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("debounce_ms must be > 0")
        return v

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class CatalogSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # None means the reference bundled with the package
    reference_path: str | None = None


class CompletionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    auto_trigger: bool = True


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TFWRSENSE__LOGGING__LEVEL=DEBUG
        env_prefix="TFWRSENSE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    indexer: IndexerSettings = IndexerSettings()
    catalog: CatalogSettings = CatalogSettings()
    completion: CompletionSettings = CompletionSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
