"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, Firebase keys, etc.)
- Validates configuration on startup
- Selects the active registration flow for this deployment
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB (document store)
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="nexa",
        description="MongoDB database name"
    )

    # Firebase Auth (identity provider)
    FIREBASE_WEB_API_KEY: Optional[str] = Field(
        default=None,
        description="Firebase Web API key used for the Identity Toolkit REST API"
    )
    FIREBASE_PROJECT_ID: Optional[str] = Field(
        default=None,
        description="Firebase project id (informational, used in logs)"
    )
    IDENTITY_TOOLKIT_URL: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
        description="Identity Toolkit base URL (point at the Auth emulator in development)"
    )
    IDENTITY_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for identity provider requests in seconds"
    )

    # Registration flow
    REGISTRATION_MODE: Literal["user_only", "with_company"] = Field(
        default="user_only",
        description="user_only defers company creation; with_company creates it at sign-up"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )
    SLOW_REQUEST_SECONDS: float = Field(
        default=5.0,
        description="Requests slower than this are logged as warnings"
    )

    @field_validator("FIREBASE_WEB_API_KEY")
    @classmethod
    def validate_firebase_key(cls, v, info: ValidationInfo):
        """Ensure the Firebase key is set in production."""
        if info.data.get("ENVIRONMENT") == "production" and not v:
            raise ValueError("FIREBASE_WEB_API_KEY is required in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def registration_creates_company(self) -> bool:
        return self.REGISTRATION_MODE == "with_company"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if config.is_production and not config.FIREBASE_WEB_API_KEY:
        errors.append("FIREBASE_WEB_API_KEY is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
