"""
Core configuration module for the Mock Interview service.
Loads settings from environment variables and config files.
"""
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MODEL_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "models.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "Mock_Interview"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Groq (OpenAI-compatible chat completions)
    groq_api_key: Optional[str] = None
    groq_api_url: str = "https://api.groq.com/openai/v1"

    # Model Provider Overrides
    provider_llm_model: Optional[str] = None

    # Deadline around a single question-generation call
    llm_timeout_seconds: float = 10.0

    # Resume upload
    max_resume_size_mb: int = 5

    @property
    def has_valid_llm_key(self) -> bool:
        """Groq keys start with ``gsk_``; ``xxxx`` marks a template placeholder."""
        key = self.groq_api_key
        return bool(key) and key.startswith("gsk_") and "xxxx" not in key


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_model_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load model configuration from YAML file.
    Environment variables can override config values.
    """
    if config_path is None:
        config_path = DEFAULT_MODEL_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Model config not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    # Apply environment variable overrides
    settings = get_settings()

    if settings.provider_llm_model:
        config["providers"]["llm"]["model"] = settings.provider_llm_model

    return config


@lru_cache()
def get_model_config() -> Dict[str, Any]:
    """Get cached model configuration."""
    return load_model_config()
