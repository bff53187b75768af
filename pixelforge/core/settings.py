# pixelforge/core/settings.py

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values that have shipped as defaults in sample configs and must never sign tokens.
_PLACEHOLDER_SECRETS = {
    "your-secret-key-change-in-production",
    "dev-secret-key-change-me",
    "changeme",
    "secret",
}


class Settings(BaseSettings):
    # URL базы данных для SQLAlchemy
    db_url: str = "sqlite:///./pixelforge.db"

    # Debug switches console logging on; otherwise logs are JSON
    app_debug: bool = True

    environment: str = "dev"

    # Signing key for bearer tokens. No default: the app refuses to start without it.
    jwt_secret: SecretStr = Field(..., min_length=32)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(24 * 60, ge=1)

    bcrypt_rounds: int = Field(12, ge=4, le=31)

    upload_dir: Path = Path("uploads")
    max_upload_bytes: int = Field(10 * 1024 * 1024, ge=1)

    cors_origins_input: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        alias="cors_origins",
    )

    # Bootstrap administrator, created at startup only when a password is configured
    admin_username: str = "admin"
    admin_email: str = "admin@pixelforge.com"
    admin_password: Optional[SecretStr] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("jwt_secret")
    @classmethod
    def reject_placeholder_secret(cls, value: SecretStr) -> SecretStr:
        if value.get_secret_value().strip().lower() in _PLACEHOLDER_SECRETS:
            raise ValueError("jwt_secret is a well-known placeholder; configure a real secret")
        return value

    @field_validator("admin_password")
    @classmethod
    def admin_password_fits_bcrypt(cls, value: Optional[SecretStr]) -> Optional[SecretStr]:
        # bcrypt caps passwords at 72 bytes
        if value is not None and len(value.get_secret_value().encode("utf-8")) > 72:
            raise ValueError("admin_password must be at most 72 bytes when UTF-8 encoded")
        return value

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins_input.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process.

    Raises pydantic.ValidationError when required values (JWT_SECRET) are
    missing or invalid, which aborts application startup.
    """
    return Settings()
