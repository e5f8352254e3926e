# -*- coding: utf-8 -*-
"""Central config for the trumpify slash command."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

LOG_LEVEL        = os.getenv("LOG_LEVEL", "INFO").upper()

GEMINI_MODEL     = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
VERTEX_LOCATION  = os.getenv("VERTEX_LOCATION", "europe-west1")
TEMPERATURE      = 0.8
MAX_OUTPUT_TOKENS = 1024

COMMAND_NAME     = "/trumpify"
COMMAND_PATH     = "/api/trumpify"

STRATEGY_NAMES   = ("relay", "impersonate", "paired", "impersonate_fallback")
DEFAULT_STRATEGY = "impersonate_fallback"


@dataclass(frozen=True)
class Settings:
    signing_secret: str | None
    bot_token: str | None
    gemini_api_key: str | None
    google_project: str | None
    allowed_user_ids: frozenset
    strategy: str
    verify_signature: bool


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_allow_list(raw: str | None) -> frozenset:
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    """Read the environment on every call so each request sees current config."""
    strategy = (os.getenv("RESPONSE_STRATEGY") or DEFAULT_STRATEGY).strip().lower()
    if strategy not in STRATEGY_NAMES:
        raise ConfigurationError(
            f"Unknown RESPONSE_STRATEGY {strategy!r}; expected one of {', '.join(STRATEGY_NAMES)}"
        )

    return Settings(
        signing_secret=os.getenv("SLACK_SIGNING_SECRET") or None,
        bot_token=os.getenv("SLACK_BOT_TOKEN") or None,
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        google_project=os.getenv("GOOGLE_CLOUD_PROJECT") or None,
        allowed_user_ids=parse_allow_list(os.getenv("ALLOWED_USER_IDS")),
        strategy=strategy,
        verify_signature=_flag(os.getenv("SLACK_VERIFY_SIGNATURE"), True),
    )
