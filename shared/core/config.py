import json
import os
from functools import lru_cache
from typing import Dict, List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.core import ENVIRONMENT


class Settings(BaseSettings):
    """
    Application-wide configuration settings.
    Loaded from environment variables or .env files.
    """

    # === General ===
    APP_NAME: str = "Mero Tasbir API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal[
        "local", "development", "testing", "production", "staging"
    ] = "local"
    APP_HOST: str = "0.0.0.0"  # nosec B104
    APP_PORT: int = 5000
    LOG_LEVEL: str = "info"
    FRONTEND_URL: str = "http://localhost:3000"
    DESCRIPTION: str = (
        "Photography and events platform API: courses, marketplace, "
        "event bookings, media sales and uploads."
    )

    # === Database ===
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_SCHEME: str = "postgresql"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "merotasbir"
    # Full URL override, e.g. sqlite+aiosqlite:///./dev.db
    DATABASE_URL: str = ""

    # === Email ===
    SMTP_TLS: bool = True
    SMTP_PORT: int = 587
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_USER: str = "your-email@gmail.com"
    SMTP_PASSWORD: str = "your-smtp-password"
    EMAIL_FROM: str = "your-email@gmail.com"
    EMAIL_FROM_NAME: str = "Mero Tasbir"
    EMAIL_TEMPLATES_DIR: str = "shared/templates"
    SUPPORT_EMAIL: str = "support@merotasbir.com"
    # Log emails instead of delivering them
    EMAIL_DEV_MODE: bool = False

    # === CORS ===
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:3001"

    # === Uploads ===
    UPLOAD_ROOT: str = "uploads/"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB
    MAX_UPLOAD_FILES: int = 10
    ALLOWED_MEDIA_TYPES: List[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
    ]
    UPLOAD_CATEGORY_DIRS: Dict[str, str] = {
        "profile": "profiles",
        "course": "courses",
        "marketplace": "marketplace",
        "event": "events",
        "hero": "hero",
        "media": "media",
    }
    # Files per request for the category endpoints
    UPLOAD_CATEGORY_LIMITS: Dict[str, int] = {
        "profile": 1,
        "course": 5,
        "marketplace": 10,
        "event": 10,
        "hero": 1,
    }
    DEFAULT_UPLOAD_DIR: str = "general"
    THUMBNAIL_SIZE: int = 320

    # === JWT ===
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_SECONDS: int = 7 * 24 * 3600
    JWT_ISSUER: str = "merotasbir-api"
    JWT_AUDIENCE: str = "merotasbir-clients"

    # === OTP / reset tokens ===
    OTP_SECRET_KEY: str = "change-me-otp-secret"
    OTP_LENGTH: int = 6
    OTP_EXPIRE_MINUTES: int = 10
    OTP_VERIFIED_WINDOW_MINUTES: int = 60
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # === Passwords ===
    BCRYPT_ROUNDS: int = 12

    # === AES256 Encryption ===
    FERNET_KEY: str = "fernet-key"

    # === Rate limiting / timeouts ===
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100 per 15 minutes"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # === Seed admin ===
    DEFAULT_ADMIN_EMAIL: str = "admin@merotasbir.com"
    DEFAULT_ADMIN_PASSWORD: str = "ChangeMe123!"
    DEFAULT_ADMIN_NAME: str = "Administrator"

    # === Misc ===
    PHONE_DEFAULT_REGION: str = "NP"

    # === Pydantic config ===
    model_config = SettingsConfigDict(
        env_file=f".env.{ENVIRONMENT}",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"{self.POSTGRES_SCHEME}+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def cors_origins(self) -> List[str]:
        try:
            parsed = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(parsed, list):
                return parsed
        except json.JSONDecodeError:
            pass

        return [
            origin.strip()
            for origin in self.ALLOWED_ORIGINS.split(",")
            if origin.strip()
        ]


# === Singleton accessor (ensures one instance only) ===
@lru_cache()
def get_settings() -> Settings:
    settings_instance = Settings()

    # Upload root must exist before StaticFiles is mounted
    os.makedirs(settings_instance.UPLOAD_ROOT, exist_ok=True)

    return settings_instance


# === Load settings ===
settings: Settings = get_settings()
