"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask Configuration
    secret_key: str = Field(..., alias="SECRET_KEY")
    flask_app: str = Field(default="wsgi.py", alias="FLASK_APP")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Outbound HTTP Configuration
    http_timeout: float = Field(default=30.0, gt=0, alias="HTTP_TIMEOUT")
    http_max_retries: int = Field(default=3, ge=0, le=10, alias="HTTP_MAX_RETRIES")

    # Password breach range lookup (k-anonymity)
    breach_range_api_url: str = Field(
        default="https://api.pwnedpasswords.com/range", alias="BREACH_RANGE_API_URL"
    )
    breach_user_agent: str = Field(
        default="webtools-password-checker", alias="BREACH_USER_AGENT"
    )

    # External function endpoints (terms analysis, vocabulary, PDF compression)
    functions_base_url: Optional[str] = Field(default=None, alias="FUNCTIONS_BASE_URL")
    functions_api_key: Optional[str] = Field(default=None, alias="FUNCTIONS_API_KEY")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure SECRET_KEY is provided and not a placeholder."""
        if not v or v == "your-secret-key-here-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        """Validate application environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("breach_range_api_url", "functions_base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize base URLs so paths can be appended with a single slash."""
        if v is None:
            return v
        return v.rstrip("/")


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


# Global settings instance - created lazily on first use
_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None
