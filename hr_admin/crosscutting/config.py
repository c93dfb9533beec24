"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup (fail fast)
  - Provide the immutable knobs of the core: signing secret, token issuer,
    token lifetime and password hash cost

Collaborators:
  - api/main.py: reads settings in the lifespan (startup validation, CORS, prefix)
  - container.py: chooses store adapters and builds codec/hasher
  - identity/tokens.py, identity/passwords.py: consume the security settings

Constraints:
  - Lives in the crosscutting layer, NOT in domain/application
  - No business logic, only configuration
  - JWT_SECRET has no default: a missing or short secret aborts startup

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
"""

import re
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_JWT_SECRET_LENGTH = 32
MIN_PASSWORD_HASH_COST = 10
# Argon2 requires memory_cost >= 8 * parallelism (default parallelism is 4)
MIN_PASSWORD_HASH_MEMORY_KIB = 32

_EXPIRES_IN_RE = re.compile(r"^(\d+)([smhd])$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_APP_ENVS = {"development", "test", "production"}
_STORE_BACKENDS = {"memory", "postgres"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: development | test | production
        jwt_secret: HMAC secret for access tokens (>= 32 chars, required)
        jwt_issuer: `iss` claim written and enforced on every token
        jwt_expires_in: Token lifetime as <n><s|m|h|d> (default: 1h)
        password_hash_cost: Argon2 time cost (>= 10)
        password_hash_memory_kib: Argon2 memory cost in KiB
        store_backend: memory | postgres
        database_url: PostgreSQL connection string (postgres backend)
        api_prefix: Prefix for the versioned API (default: /api/v1)
        allowed_origins: Comma-separated CORS origins
        log_level / log_json: logger configuration
        dev_seed_admin*: bootstrap ADMIN user outside production
    """

    # Environment
    app_env: str = "development"

    # Security - JWT
    jwt_secret: str
    jwt_issuer: str = "hr-admin-api"
    jwt_expires_in: str = "1h"

    # Security - Password hashing (Argon2)
    password_hash_cost: int = 12
    password_hash_memory_kib: int = 65536

    # Persistence
    store_backend: str = "memory"
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # HTTP
    api_prefix: str = "/api/v1"
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Dev Tools
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = ""

    @field_validator("app_env")
    @classmethod
    def app_env_valid(cls, v: str) -> str:
        env = (v or "").strip().lower()
        if env not in _APP_ENVS:
            raise ValueError("app_env must be one of: development, test, production")
        return env

    @field_validator("jwt_secret")
    @classmethod
    def jwt_secret_strong_enough(cls, v: str) -> str:
        if len((v or "").strip()) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be set and at least {MIN_JWT_SECRET_LENGTH} characters long"
            )
        return v

    @field_validator("jwt_issuer")
    @classmethod
    def jwt_issuer_not_empty(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("JWT_ISSUER must not be empty")
        return v.strip()

    @field_validator("jwt_expires_in")
    @classmethod
    def jwt_expires_in_format(cls, v: str) -> str:
        value = (v or "").strip()
        match = _EXPIRES_IN_RE.match(value)
        if not match or int(match.group(1)) <= 0:
            raise ValueError(
                "JWT_EXPIRES_IN must be in format: 1s, 1m, 1h, 1d (seconds, minutes, hours, days)"
            )
        return value

    @field_validator("password_hash_cost")
    @classmethod
    def password_hash_cost_minimum(cls, v: int) -> int:
        if v < MIN_PASSWORD_HASH_COST:
            raise ValueError(
                f"PASSWORD_HASH_COST must be a number >= {MIN_PASSWORD_HASH_COST}"
            )
        return v

    @field_validator("password_hash_memory_kib")
    @classmethod
    def password_hash_memory_minimum(cls, v: int) -> int:
        if v < MIN_PASSWORD_HASH_MEMORY_KIB:
            raise ValueError(
                f"PASSWORD_HASH_MEMORY_KIB must be >= {MIN_PASSWORD_HASH_MEMORY_KIB}"
            )
        return v

    @field_validator("store_backend")
    @classmethod
    def store_backend_valid(cls, v: str) -> str:
        backend = (v or "").strip().lower()
        if backend not in _STORE_BACKENDS:
            raise ValueError("store_backend must be memory or postgres")
        return backend

    @model_validator(mode="after")
    def validate_store_requirements(self):
        if self.store_backend == "postgres" and not self.database_url.strip():
            raise ValueError("DATABASE_URL is required when STORE_BACKEND=postgres")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError("DB_POOL_MIN_SIZE must be <= DB_POOL_MAX_SIZE")
        return self

    @property
    def jwt_access_ttl_seconds(self) -> int:
        """Token lifetime in seconds, derived from jwt_expires_in."""
        match = _EXPIRES_IN_RE.match(self.jwt_expires_in)
        assert match is not None  # guaranteed by the field validator
        return int(match.group(1)) * _UNIT_SECONDS[match.group(2)]

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_development(self) -> bool:
        return self.app_env == "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
