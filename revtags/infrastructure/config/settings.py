"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses, grouped per concern
- Single source of truth for all configurable values

EXTENSIBILITY:
- To switch text-generation provider: change GENERATION_API_URL / GENERATION_MODEL
  (any OpenAI-compatible chat completions endpoint works)
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file if present (development convenience)
load_dotenv()


DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"

SYSTEM_PROMPT = (
    "You write short, human-sounding review text for a local business. "
    "No promotional or marketing language."
)


@dataclass(frozen=True)
class GenerationSettings:
    """External text-generation service settings."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY_REAL", ""))
    api_url: str = field(
        default_factory=lambda: os.getenv("GENERATION_API_URL", DEFAULT_API_URL)
    )
    model: str = field(default_factory=lambda: os.getenv("GENERATION_MODEL", "gpt-4o-mini"))

    # Every attempt is cut off after this many seconds
    timeout_seconds: float = 8.0
    max_tokens: int = 120

    system_prompt: str = SYSTEM_PROMPT


@dataclass(frozen=True)
class ServerSettings:
    """Web server settings."""

    host: str = field(default_factory=lambda: os.getenv("REVTAGS_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("REVTAGS_PORT", "8000")))
    reload: bool = field(
        default_factory=lambda: os.getenv("REVTAGS_RELOAD", "false").lower() in ("1", "true", "yes")
    )


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from revtags.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.generation.model)
    """

    generation: GenerationSettings = field(default_factory=GenerationSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.generation.api_key:
            issues.append(
                "WARNING: OPENAI_API_KEY_REAL not set. "
                "Draft requests will fail until it is configured."
            )

        if self.generation.timeout_seconds <= 0:
            issues.append(
                f"WARNING: generation timeout is {self.generation.timeout_seconds}s. "
                "Every attempt will time out."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
