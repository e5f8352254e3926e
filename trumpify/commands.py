# -*- coding: utf-8 -*-
"""Inbound slash-command payloads and the replies the handler renders."""

import json
import logging
from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from .errors import ValidationError

logger = logging.getLogger("trumpify")

URL_VERIFICATION = "url_verification"


def decode_body(raw_body: bytes, content_type: str | None = None) -> dict:
    """Decode a webhook body into a flat ``str -> str`` mapping."""
    body = raw_body.decode("utf-8", errors="replace") if isinstance(raw_body, bytes) else (raw_body or "")

    if content_type and "application/json" in content_type.lower():
        try:
            data = json.loads(body or "{}")
        except json.JSONDecodeError:
            logger.warning("Bad JSON body, treating as empty payload")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    # later keys win, like URLSearchParams iteration
    return dict(parse_qsl(body, keep_blank_values=True))


@dataclass(frozen=True)
class SlashCommand:
    text: str = ""
    user_id: str = ""
    user_name: str = ""
    channel_id: str = ""
    thread_ts: str | None = None
    response_url: str = ""
    command: str = ""
    type: str = ""
    challenge: str = ""

    @classmethod
    def from_payload(cls, payload: dict) -> "SlashCommand":
        def _get(key):
            value = payload.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            text=_get("text"),
            user_id=_get("user_id"),
            user_name=_get("user_name"),
            channel_id=_get("channel_id"),
            thread_ts=_get("thread_ts") or None,
            response_url=_get("response_url"),
            command=_get("command"),
            type=_get("type"),
            challenge=_get("challenge"),
        )

    @property
    def is_url_verification(self) -> bool:
        return self.type == URL_VERIFICATION

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    def require_channel(self) -> None:
        missing = [name for name in ("user_id", "channel_id") if not getattr(self, name)]
        if missing:
            raise ValidationError(f"Missing {', '.join(missing)} in command payload")


@dataclass
class CommandReply:
    status_code: int = 200
    body: dict | None = field(default=None)

    @classmethod
    def empty(cls) -> "CommandReply":
        return cls()

    @classmethod
    def ephemeral(cls, text: str) -> "CommandReply":
        return cls(body={"response_type": "ephemeral", "text": text})

    @classmethod
    def challenge(cls, token: str) -> "CommandReply":
        return cls(body={"challenge": token})
