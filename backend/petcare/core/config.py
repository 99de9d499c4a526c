"""Module: config."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Configure pydantic-settings to also load values from local .env file.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Primary SQLAlchemy connection string for the backend database.
    database_url: str
    # Create tables on startup instead of running alembic (local dev only).
    auto_create_schema: bool = False

    # Tokens are issued by the external auth service and signed with this secret.
    auth_jwt_secret: str = "change-me"
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str | None = None
    auth_jwt_issuer: str | None = None

    # Browser origins allowed to call the API.
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    # Public prefix under which the blob store serves uploaded files.
    file_public_base_url: str = "http://localhost:3000/files"

    log_level: str = "INFO"
    # None picks console output on a TTY and JSON otherwise.
    log_json: bool | None = None

    # Insert retries when the unique slug index rejects a freshly allocated slug.
    slug_insert_attempts: int = Field(default=3, ge=1, le=10)
    max_pet_contacts: int = Field(default=5, ge=1)
    vaccine_expiry_window_days: int = Field(default=30, ge=0)


# Global settings instance imported by app modules at runtime.
settings = Settings()
