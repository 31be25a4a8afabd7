"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Checked by require_token() so a missing token fails the run, not import
    github_token: str = ""
    github_graphql_url: str = "https://api.github.com/graphql"

    # Search settings
    default_result_limit: int = 20
    request_timeout: float = 30.0

    # Output settings
    output_dir: Path = Path("dist")
    noreply_host: str = "github.com"

    # Logging settings
    log_dir: Path = Path("logs")
    log_level: str = "INFO"

    def require_token(self) -> str:
        """Return the GitHub token or raise ConfigurationError if it is unset."""
        if not self.github_token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is required")
        return self.github_token


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
