"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://listings:listings_dev_password@db:5432/listings"

    # Session store
    redis_url: str = "redis://redis:6379/0"
    session_backend: str = "redis"  # "redis" or "memory"
    session_key_prefix: str = "listings"

    # Tokens
    access_token_secret: str = "dev-access-secret-change-in-production"
    refresh_token_secret: str = "dev-refresh-secret-change-in-production"
    token_algorithm: str = "HS256"
    access_token_ttl_minutes: int = 15
    refresh_token_ttl_days: int = 30

    # Password hashing (Argon2id)
    password_time_cost: int = 1
    password_memory_cost: int = 64 * 1024  # KiB
    password_parallelism: int = 4
    password_hash_len: int = 32

    # Registration: "exactly_one" or "at_least_one" of is_supplier/is_constructor
    capability_policy: str = "at_least_one"

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
