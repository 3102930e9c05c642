"""
Application settings using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """CLI settings with validation and defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    openai_api_key: str = Field(default="", description="OpenAI API key")

    # Endpoints
    chat_completions_url: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        description="Chat completions endpoint (chat and vision requests)",
    )
    image_generations_url: str = Field(
        default="https://api.openai.com/v1/images/generations",
        description="Image generations endpoint (DALL-E requests)",
    )
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, le=300, description="Overall request timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")
    log_file: str = Field(default="", description="Optional log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            raise ValueError(f"log_level must be one of {valid}")
        return upper

    @field_validator("chat_completions_url", "image_generations_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        stripped = v.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("endpoint URLs must start with http:// or https://")
        return stripped


def get_settings() -> Settings:
    """Build settings from the current environment.

    Not cached: the credential is read when the command runs.
    """
    return Settings()
