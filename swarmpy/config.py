"""
Environment-driven configuration for swarm runs and the default OpenAI provider.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from openai import AsyncOpenAI

load_dotenv(override=False)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 16385
DEFAULT_INSTRUCTIONS = "You are a helpful agent."


def _env_flag(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() not in ("0", "false", "no", "off", "")


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={val!r}; using {default}")
        return default


@dataclass
class SwarmSettings:
    """Snapshot of the environment settings used when building agents and swarms."""
    default_model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    enable_tracing: bool = True
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "SwarmSettings":
        return cls(
            default_model=os.getenv("SWARM_DEFAULT_MODEL") or DEFAULT_MODEL,
            max_tokens=_env_int("SWARM_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            enable_tracing=_env_flag("SWARM_ENABLE_TRACING", True),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL"),
        )


def get_settings() -> SwarmSettings:
    return SwarmSettings.from_env()


def get_openai_client() -> AsyncOpenAI:
    """
    Initializes and returns an async OpenAI client configured from the environment.
    """
    settings = get_settings()
    if not settings.openai_api_key:
        raise ValueError("OPENAI_API_KEY environment variable is not set.")

    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url or "https://api.openai.com/v1",
    )
