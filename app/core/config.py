"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

APP_VERSION = "1.0.0"

# Placeholder secret; rejected when APP_ENV=prod.
DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # SQLite for local use; point at Postgres in production
    DATABASE_URL: str = "sqlite:///./proposals.db"
    # Create tables and seed defaults on startup
    DB_AUTO_INIT: bool = True

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 1440
    AUTH_COOKIE_NAME: str = "token"
    AUTH_COOKIE_ENABLED: bool = True

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 10

    # Allowed browser origins in prod; dev always allows the local frontend
    CORS_ORIGINS: list[str] = []

    # Proposal document templates (.docx)
    TEMPLATES_DIR: str = "templates"
    MAX_TEMPLATE_BYTES: int = 20 * 1024 * 1024

    LOG_LEVEL: str = "INFO"
    # When set, error.log and combined.log are written here
    LOG_DIR: str | None = None

    # Account created by init_db on an empty database
    BOOTSTRAP_ADMIN_USERNAME: str = "admin"
    BOOTSTRAP_ADMIN_EMAIL: str = "admin@example.com"
    BOOTSTRAP_ADMIN_PASSWORD: SecretStr = SecretStr("ch4ngeme333!!!")

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:///./proposals.db)"
            )
        return v.strip()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        if not v.strip().upper().startswith("HS"):
            raise ValueError("JWT_ALGORITHM must be an HMAC algorithm (HS256, HS384, HS512)")
        return v.strip().upper()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 10 or v > 15:
            raise ValueError("BCRYPT_ROUNDS must be between 10 and 15")
        return v

    @field_validator("AUTH_COOKIE_NAME")
    @classmethod
    def validate_auth_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("AUTH_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("MAX_TEMPLATE_BYTES")
    @classmethod
    def validate_max_template_bytes(cls, v: int) -> int:
        if v < 1024 or v > 100 * 1024 * 1024:
            raise ValueError("MAX_TEMPLATE_BYTES must be between 1 KB and 100 MB")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @model_validator(mode="after")
    def validate_prod_secret(self) -> "Settings":
        if self.APP_ENV == "prod" and self.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be changed from the default when APP_ENV=prod")
        return self

    @property
    def is_prod(self) -> bool:
        return self.APP_ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
