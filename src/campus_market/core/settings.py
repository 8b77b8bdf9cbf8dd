"""Application settings and configuration.

This module defines all configuration options for the Campus Market backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="Campus Market", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(default="change-me-in-production", alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./campus_market.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Messaging and notification behaviour
    notification_feed_limit: int = Field(default=50, alias="NOTIFICATION_FEED_LIMIT")
    reject_blank_messages: bool = Field(default=True, alias="REJECT_BLANK_MESSAGES")
    sender_fallback_name: str = Field(default="Someone", alias="SENDER_FALLBACK_NAME")
    unknown_user_name: str = Field(default="Unknown User", alias="UNKNOWN_USER_NAME")

    # Client polling cadence (seconds)
    message_poll_interval_seconds: float = Field(
        default=3.0,
        alias="MESSAGE_POLL_INTERVAL_SECONDS",
    )
    nav_poll_interval_seconds: float = Field(
        default=5.0,
        alias="NAV_POLL_INTERVAL_SECONDS",
    )
    client_timeout_seconds: float = Field(default=10.0, alias="CLIENT_TIMEOUT_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def poll_intervals(self) -> dict[str, float]:
        """Return client poll intervals as a convenience dictionary."""
        return {
            "messages": self.message_poll_interval_seconds,
            "navigation": self.nav_poll_interval_seconds,
        }


settings = Settings()
