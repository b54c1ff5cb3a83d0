"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - Settings are frozen: built once at startup, then passed explicitly to
      create_app() and the lifecycle (no component reads os.environ itself)
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Empty auth_token is legal: it disables the authorization gate (open access)
    - VALKEY_ADDRESS accepts bare host:port (as deployed) or a full redis:// URL
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 8080

    # Store
    valkey_address: str = "localhost:6379"
    valkey_password: str = ""

    @field_validator("valkey_address", mode="before")
    @classmethod
    def strip_address(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.strip()
            return v or "localhost:6379"
        return v

    # Authorization
    auth_token: str = ""

    # Transport timeouts (seconds)
    read_timeout_seconds: float = 10.0
    write_timeout_seconds: float = 10.0
    idle_timeout_seconds: int = 120

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
