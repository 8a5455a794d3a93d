"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceSettings(BaseSettings):
    """Open5e source record configuration."""

    data_path: str = Field(
        default="data/open5e",
        description="Directory holding saved Open5e result pages "
                    "(species.json, classes.json, backgrounds.json)",
    )
    ambiguous_choice_documents: list[str] = Field(
        default_factory=lambda: ["a5e"],
        description="Document slugs whose background skill proficiency field encodes "
                    "choices as free text. Skill proficiencies are not "
                    "extracted from backgrounds in these documents. "
                    "Set via SOURCES__AMBIGUOUS_CHOICE_DOCUMENTS='[\"a5e\"]'",
    )

    model_config = SettingsConfigDict(env_prefix="SOURCES_")


class ParserSettings(BaseSettings):
    """Feature parser configuration."""

    strict: bool = Field(
        default=False,
        description="Raise on malformed source text instead of skipping the "
                    "offending feature and continuing.",
    )

    model_config = SettingsConfigDict(env_prefix="PARSER_")


class StorageSettings(BaseSettings):
    """Character persistence configuration."""

    path: str = Field(
        default="data/character",
        description="Directory for the persisted character record and selections",
    )
    character_file: str = Field(
        default="char_sheet_character.json",
        description="File name of the character record",
    )
    selections_file: str = Field(
        default="char_sheet_selected_optional_features.json",
        description="File name of the selected optional features list",
    )

    model_config = SettingsConfigDict(env_prefix="STORAGE_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    sources: SourceSettings = Field(default_factory=SourceSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
