from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via .env file or environment variables.
    DATABASE_URL is the administrative connection (migrations, role setup,
    tenant purges). APP_DATABASE_URL is the low-privilege application role
    used by request-serving code.
    """

    # Database
    DATABASE_URL: str | None = None
    APP_DATABASE_URL: str | None = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_STATEMENT_TIMEOUT_MS: int | None = None
    DB_SEED: bool = False

    # JWT Authentication
    SECRET_KEY: str | None = None

    # Application
    APP_NAME: str = "ucom Tenancy API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS from comma-separated string"""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def app_database_url(self) -> str | None:
        """Connection string for the application role (falls back to DATABASE_URL)"""
        return self.APP_DATABASE_URL or self.DATABASE_URL


def sqlalchemy_url(url: str) -> str:
    """
    Normalize a libpq-style connection string for SQLAlchemy.

    ``postgres://`` is accepted by libpq but rejected by SQLAlchemy, and a
    bare ``postgresql://`` should always resolve to the psycopg2 driver.
    """
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg2://" + url[len(prefix):]
    return url


# Global settings instance
settings = Settings()
