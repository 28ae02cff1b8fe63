from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/dbname, or memory:// for the in-process store
    session_secret_key: str = Field(min_length=1)  # HMAC key for session tokens
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    log_level: str | None = Field(default=None, pattern=r"(?i)^(debug|info|warning|error|critical)$")  # Overrides the debug-derived level
    session_ttl_days: int = Field(default=7, ge=1)
    max_sessions_per_user: int = Field(default=2, ge=1)
    cookie_secure: bool = True  # Disable only for local development over plain HTTP
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKLIST_",
        "extra": "ignore",
    }

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(days=self.session_ttl_days)
