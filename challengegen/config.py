# challengegen/config.py
import os
import logging

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Pick up a local .env during development; real deployments set the environment directly
load_dotenv()

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
DEFAULT_REDIS_URL = "redis://redis:6379"


class Settings(BaseModel):
    """Process-wide configuration, read once at start-up and never mutated."""
    model_config = ConfigDict(frozen=True)

    anthropic_api_key: str = ""
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    anthropic_base_url: str = DEFAULT_ANTHROPIC_BASE_URL
    redis_url: str = DEFAULT_REDIS_URL
    log_level: str = "INFO"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            anthropic_model=os.environ.get("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL),
            anthropic_base_url=os.environ.get("ANTHROPIC_BASE_URL", DEFAULT_ANTHROPIC_BASE_URL),
            redis_url=os.environ.get("REDIS_URL", DEFAULT_REDIS_URL),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            port=int(os.environ.get("PORT", 8080)),
        )
        if not settings.anthropic_api_key:
            logger.warning("ANTHROPIC_API_KEY is not set; generation calls will be rejected upstream.")
        return settings
