"""
Configuration management for the freight ledger.

Handles loading and accessing:
- Business configuration (config.yaml)
- Environment variables (.env overrides)
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseModel):
    """Ledger arithmetic and presentation settings."""

    currency: str = "INR"
    currency_symbol: str = "₹"
    money_places: int = Field(2, ge=0, le=6)
    strict_cash_check: bool = True


class LoggingSettings(BaseModel):
    """Structured logging settings."""

    level: str = "INFO"
    renderer: str = "json"  # "json" or "console"


class EnvironmentSettings(BaseSettings):
    """Environment variables configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    config_dir: Optional[str] = Field(None, alias="LEDGER_CONFIG_DIR")
    log_level: Optional[str] = Field(None, alias="LOG_LEVEL")
    log_renderer: Optional[str] = Field(None, alias="LOG_RENDERER")


class ConfigManager:
    """
    Central configuration manager for the freight ledger.

    Loads and provides access to:
    - Business configuration from config/config.yaml
    - Environment variables from .env
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional path to config directory. Defaults to
                LEDGER_CONFIG_DIR, then project root/config.
        """
        self._env_settings: Optional[EnvironmentSettings] = None

        if config_dir is None:
            env_dir = self.env.config_dir
            if env_dir:
                config_dir = Path(env_dir)
            else:
                project_root = Path(__file__).parent.parent.parent
                config_dir = project_root / "config"

        self.config_dir = Path(config_dir)
        self._business_config: Optional[dict[str, Any]] = None

    @property
    def business_config(self) -> dict[str, Any]:
        """Load and return business configuration from config.yaml."""
        if self._business_config is None:
            config_path = self.config_dir / "config.yaml"
            if not config_path.exists():
                self._business_config = {}
            else:
                with open(config_path, "r", encoding="utf-8") as f:
                    self._business_config = yaml.safe_load(f) or {}
        return self._business_config

    @property
    def env(self) -> EnvironmentSettings:
        """Load and return environment settings."""
        if self._env_settings is None:
            self._env_settings = EnvironmentSettings()
        return self._env_settings

    def get_company_info(self) -> dict[str, Any]:
        """Get company information from business config."""
        return self.business_config.get("company", {})

    def get_ledger_settings(self) -> LedgerSettings:
        """
        Get ledger settings from business config.

        Returns:
            LedgerSettings, with defaults for any missing key

        Raises:
            pydantic.ValidationError: If the ledger block is malformed
        """
        return LedgerSettings(**(self.business_config.get("ledger") or {}))

    def get_logging_settings(self) -> LoggingSettings:
        """Get logging settings, with LOG_LEVEL / LOG_RENDERER taking precedence."""
        settings = LoggingSettings(**(self.business_config.get("logging") or {}))
        if self.env.log_level:
            settings.level = self.env.log_level
        if self.env.log_renderer:
            settings.renderer = self.env.log_renderer
        return settings


# Global config instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Get the global configuration manager instance.

    Returns:
        ConfigManager singleton instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config() -> None:
    """Drop the global instance so the next get_config() reloads from disk."""
    global _config_manager
    _config_manager = None
