"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class TradeoffConfig(BaseSettings):
    """Tradeoff engine configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TRADEOFF_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Simulation defaults
    default_period_days: int = Field(31, gt=0)  # Idealized days between loan payments
    default_mode: Literal["idealized", "real-world"] = "idealized"

    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Optional[str] = None  # If None, logs to stderr

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8090
    api_reload: bool = False


# Global configuration instance
config = TradeoffConfig()


def get_config() -> TradeoffConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> TradeoffConfig:
    """Reload configuration from environment"""
    global config
    config = TradeoffConfig()
    return config
