"""Client configuration via ``EMS_``-prefixed environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Settings for the API client, the session store and the CLI."""

    API_URL: str = "http://localhost:3001/api"
    REQUEST_TIMEOUT: float = 10.0

    # Session persistence (the durable equivalent of browser storage)
    SESSION_FILE: Path = Path.home() / ".ems" / "session.json"
    SESSION_SECRET: str
    SESSION_TTL_HOURS: int = 24

    class Config:
        env_prefix = "EMS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_client_settings() -> ClientSettings:
    """Load settings once; raises if ``EMS_SESSION_SECRET`` is unset."""
    return ClientSettings()
