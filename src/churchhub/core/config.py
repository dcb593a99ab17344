from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ChurchHub"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # LGPD: keep emails out of logs by default

    # Database (control plane + tenant namespaces share one PostgreSQL database)
    database_url: str
    database_pool_size: int = 20
    database_max_overflow: int = 0
    tenant_pool_size: int = 10
    tenant_max_overflow: int = 0
    database_pool_timeout: float = 5.0  # seconds to wait for a pooled connection
    database_pool_recycle: int = 300  # seconds before an idle connection is replaced
    database_connect_timeout: float = 2.0
    database_statement_cache_size: int = 100
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    auto_initialize_schema: bool = True

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Redis (optional - tenant resolution falls back to the database)
    redis_url: str | None = None
    redis_pool_size: int = 10
    redis_socket_timeout: float = 1.0  # seconds
    tenant_cache_ttl_seconds: int = 60

    # Rate limiting (slowapi syntax)
    registration_rate_limit: str = "5/minute"
    login_rate_limit: str = "10/minute"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards because credentials are allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v.startswith("postgresql+asyncpg://"):
            raise ValueError("DATABASE_URL must use the postgresql+asyncpg driver")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
