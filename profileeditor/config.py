"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Literal, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator


class AvailabilityConfig(BaseModel):
    """Settings for the availability editor."""
    output_format: Literal["date", "timestamp"] = "date"
    preview_limit: int = 20

    @field_validator("preview_limit")
    @classmethod
    def validate_preview_limit(cls, value: int) -> int:
        """Ensure at least one date is previewed."""
        if value <= 0:
            raise ValueError("preview_limit must be greater than zero")
        return value


class ServicesConfig(BaseModel):
    """Settings for the service catalog editor."""
    # When true, incomplete drafts are dropped on save without asking.
    drop_incomplete: bool = False


class StoreConfig(BaseModel):
    """Where profiles are read from and written to."""
    path: Path = Path("profiles.json")


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Paris"
    locale: str = "fr"
    log_level: str = "WARNING"
    availability: AvailabilityConfig = Field(default_factory=AvailabilityConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """
        Load an explicit config file, or the default one if it exists.

        Every setting has a default, so a missing default file is not an
        error. A missing explicit file is.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
