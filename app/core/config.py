"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "AboutBlank Sync API"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_grace_seconds: int = 30

    # Database
    database_url: str = "sqlite+aiosqlite:///./aboutblank_sync.db"
    db_pool_size: int = 20
    db_pool_timeout_seconds: int = 10  # wait for a free connection
    db_pool_recycle_seconds: int = 30
    db_ssl: bool = False
    auto_create_schema: bool = True

    # Auth key header (SHA-256 hex digest)
    auth_header_name: str = "X-Auth-Key"
    auth_key_length: int = 64

    # HTTP surface
    cors_origins: list[str] = ["https://aboutblank.ie", "http://localhost:3003"]
    cors_allow_credentials: bool = True
    max_body_bytes: int = 1024 * 1024  # 1 MiB
    gzip_minimum_size: int = 500
    security_headers_enabled: bool = True
    trust_forwarded_for: bool = False

    # Rate limits (per client IP)
    rate_limit_api_requests: int = 100
    rate_limit_api_window_seconds: int = 15 * 60
    rate_limit_strict_requests: int = 5
    rate_limit_strict_window_seconds: int = 60 * 60

    # Result sizes
    cravings_default_limit: int = 1000
    cravings_max_limit: int = 1000
    sync_cravings_limit: int = 1000
    community_default_limit: int = 50
    community_max_limit: int = 200
    community_message_max_length: int = 500
    community_default_emoji: str = "💪"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def async_database_url(self) -> str:
        """Database URL with an async driver; hosted Postgres hands out postgres:// URLs."""
        url = (self.database_url or "").strip()
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


def get_settings() -> Settings:
    return Settings()
