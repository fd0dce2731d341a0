import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from app.core.errors import ConfigurationError


class AppConfig(BaseModel):
    mongodb_uri: str
    mongodb_db: str = "devevent"
    mongodb_timeout_ms: int = 5000
    mongodb_transactions: bool = False
    api_key: Optional[str] = None
    events_page_limit: int = Field(default=50, ge=1)
    environment: str = "development"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw and raw.isdigit() and int(raw) >= minimum:
        return int(raw)
    return default


def load_config() -> AppConfig:
    """
    Build the application config from the environment.

    Raises:
        ConfigurationError: If MONGODB_URI is missing or blank
    """
    load_dotenv()
    uri = (os.getenv("MONGODB_URI") or "").strip()
    if not uri:
        raise ConfigurationError(
            'Invalid or missing environment variable: "MONGODB_URI". '
            "Please add it to your environment (e.g. .env)."
        )
    return AppConfig(
        mongodb_uri=uri,
        mongodb_db=os.getenv("MONGODB_DB", "devevent"),
        mongodb_timeout_ms=_int_env("MONGODB_TIMEOUT_MS", 5000),
        mongodb_transactions=os.getenv("MONGODB_TRANSACTIONS", "false").lower() == "true",
        api_key=os.getenv("API_KEY") or None,
        events_page_limit=_int_env("EVENTS_PAGE_LIMIT", 50, minimum=1),
        environment=os.getenv("ENVIRONMENT", "development"),
    )
