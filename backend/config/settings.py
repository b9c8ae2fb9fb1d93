from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path

from crawler.config import DEFAULT_SEARCH_BASE_URL

# Get absolute path to backend directory (config/settings.py -> backend/)
_backend_dir = Path(__file__).parent.parent
_env_local = _backend_dir / '.env.local'
_env_file = _backend_dir / '.env'


class Settings(BaseSettings):
    """Application settings"""

    # Search target - term segment and ";kw" marker are appended to this
    SEARCH_BASE_URL: str = DEFAULT_SEARCH_BASE_URL

    # Filter code implied by isintern=true when no explicit codes are sent
    DEFAULT_INTERN_FILTER_CODE: int = 1

    # Fetching - None means no per-fetch timeout
    FETCH_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)
    MAX_CONCURRENT_FETCHES: int = Field(default=1, ge=1)  # 1 = strictly sequential

    # Logging / local server
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    class Config:
        # Prioritize .env.local for local development, fallback to .env
        # Use absolute paths to avoid working directory issues
        env_file = str(_env_local) if _env_local.exists() else str(_env_file)
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from environment file


settings = Settings()
