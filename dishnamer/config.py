"""Configuration management with pydantic-settings and validation."""

from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Anthropic Configuration (optional — without a key only template names are offered)
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-5-20250929"
    claude_max_tokens: int = 300
    generation_timeout: float = 20.0
    anthropic_max_retries: int = 1

    # Database Configuration
    database_url: str = "sqlite:///./data/dishnamer.db"
    fail_loud_persistence: bool = False

    # Upload limits
    max_upload_bytes: int = 10 * 1024 * 1024

    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Hosted Postgres URLs often use postgres:// but SQLAlchemy requires postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("database_url", "claude_model", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        """Validate that required settings are not blank when provided."""
        if isinstance(v, str) and v.strip() == "":
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("generation_timeout", "max_upload_bytes")
    @classmethod
    def check_positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @property
    def claude_enabled(self) -> bool:
        """Whether the description-driven path can be used."""
        return bool(self.anthropic_api_key.strip())


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If environment variables are invalid.
    """
    return Settings()
