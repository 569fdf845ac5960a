import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_BASE_URL = "https://api.checkwx.com"
DEFAULT_ORIGINS = "http://localhost:5173"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    checkwx_api_key: Optional[str] = None
    checkwx_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT
    allowed_origins: List[str] = [DEFAULT_ORIGINS]
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _read_timeout() -> float:
    raw = os.getenv("CHECKWX_TIMEOUT")
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid CHECKWX_TIMEOUT {raw!r}, using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT


def load_settings() -> Settings:
    """Build Settings from the process environment (and a .env file if present).

    Missing values fall back to defaults; a missing API key is reported later,
    when a request actually needs it.
    """
    load_dotenv()

    origins = os.getenv("ALLOWED_ORIGINS", DEFAULT_ORIGINS)
    return Settings(
        checkwx_api_key=os.getenv("CHECKWX_API_KEY") or None,
        checkwx_base_url=os.getenv("CHECKWX_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        request_timeout=_read_timeout(),
        allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        environment=os.getenv("ENVIRONMENT", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
