"""Runtime settings read from the environment.

A .env file, if present, is loaded once when this module is imported.
Values are read on each call to ``get_settings`` so tests can patch
``os.environ`` without reloading modules.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LLM_MODEL = "gpt-4o-mini"
DEFAULT_SEARCH_TIMEOUT = 10.0


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["http://localhost:3000"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Service configuration."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    llm_model: str = DEFAULT_LLM_MODEL
    llm_supports_top_k: bool = False
    search_api_key: Optional[str] = None
    search_engine_id: Optional[str] = None
    search_link_mode: str = "homepage"
    search_timeout: float = DEFAULT_SEARCH_TIMEOUT
    allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    try:
        search_timeout = float(os.getenv("SEARCH_TIMEOUT_SECONDS", DEFAULT_SEARCH_TIMEOUT))
    except ValueError:
        search_timeout = DEFAULT_SEARCH_TIMEOUT

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        llm_model=os.getenv("LLM_MODEL", DEFAULT_LLM_MODEL),
        llm_supports_top_k=os.getenv("LLM_SUPPORTS_TOP_K", "false").lower() in ("1", "true", "yes"),
        search_api_key=os.getenv("SEARCH_API_KEY") or None,
        search_engine_id=os.getenv("SEARCH_ENGINE_ID") or None,
        search_link_mode=os.getenv("SEARCH_LINK_MODE", "homepage").lower(),
        search_timeout=search_timeout,
        allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
