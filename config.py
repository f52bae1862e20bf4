"""
Environment-driven settings.

  GITHUB_TOKEN        optional; raises the GitHub rate limit
  GITHUB_API_VERSION  X-GitHub-Api-Version header (default 2022-11-28)
  GROQ_API_KEY        completion API key (OPENAI_API_KEY is accepted too)
  LLM_BASE_URL        OpenAI-compatible base URL (default: Groq)
  LLM_MODEL           chat model id
  PORT, LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

GITHUB_API_BASE = "https://api.github.com"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


@dataclass(frozen=True)
class Settings:
    github_token: Optional[str] = None
    github_api_base: str = GITHUB_API_BASE
    github_api_version: str = "2022-11-28"
    llm_api_key: Optional[str] = None
    llm_base_url: str = GROQ_BASE_URL
    llm_model: str = DEFAULT_MODEL
    port: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            github_token=_env("GITHUB_TOKEN") or None,
            github_api_version=_env("GITHUB_API_VERSION", "2022-11-28"),
            llm_api_key=_env("GROQ_API_KEY") or _env("OPENAI_API_KEY") or None,
            llm_base_url=_env("LLM_BASE_URL", GROQ_BASE_URL),
            llm_model=_env("LLM_MODEL", DEFAULT_MODEL),
            port=int(_env("PORT", "5000")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
