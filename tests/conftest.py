"""Shared fixtures: fake rewrite provider, fake Slack messenger, signed requests."""

from __future__ import annotations

import asyncio
import time
from urllib.parse import urlencode

import httpx
import pytest
from slack_sdk.signature import SignatureVerifier

import slack_handler
from main import app
from trumpify.messaging import UserIdentity
from trumpify.strategies import drain_background

SIGNING_SECRET = "test-signing-secret"
COMMAND_URL = "/api/trumpify"

CONFIG_VARS = (
    "SLACK_SIGNING_SECRET",
    "SLACK_VERIFY_SIGNATURE",
    "SLACK_BOT_TOKEN",
    "GEMINI_API_KEY",
    "ALLOWED_USER_IDS",
    "RESPONSE_STRATEGY",
)


class FakeRewriter:
    def __init__(self, result: str | None = None, error: Exception | None = None, gate: asyncio.Event | None = None):
        self.result = result
        self.error = error
        self.gate = gate
        self.calls: list[str] = []
        self.finished = False

    async def rewrite(self, text: str) -> str:
        self.calls.append(text)
        if self.gate is not None:
            await self.gate.wait()
        self.finished = True
        if self.error is not None:
            raise self.error
        return self.result if self.result is not None else f"TREMENDOUS: {text}"


class FakeMessenger:
    def __init__(self, post_error: Exception | None = None, ephemeral_error: Exception | None = None):
        self.post_error = post_error
        self.ephemeral_error = ephemeral_error
        self.calls: list[tuple[str, dict]] = []
        self._ts = 0

    def calls_to(self, method: str) -> list[dict]:
        return [kwargs for name, kwargs in self.calls if name == method]

    async def user_identity(self, user_id):
        self.calls.append(("user_identity", {"user_id": user_id}))
        return UserIdentity(name="Jane Doe", avatar_url="https://avatars.example/jane.png")

    async def post_message(self, channel, text, thread_ts=None, username=None, icon_url=None):
        self.calls.append(
            (
                "post_message",
                {"channel": channel, "text": text, "thread_ts": thread_ts, "username": username, "icon_url": icon_url},
            )
        )
        if self.post_error is not None:
            raise self.post_error
        self._ts += 1
        return f"1700000000.00000{self._ts}"

    async def post_ephemeral(self, channel, user, text, thread_ts=None):
        self.calls.append(("post_ephemeral", {"channel": channel, "user": user, "text": text, "thread_ts": thread_ts}))
        if self.ephemeral_error is not None:
            raise self.ephemeral_error

    async def respond(self, response_url, text, response_type="in_channel", thread_ts=None):
        self.calls.append(
            (
                "respond",
                {"response_url": response_url, "text": text, "response_type": response_type, "thread_ts": thread_ts},
            )
        )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-test")
    monkeypatch.setenv("RESPONSE_STRATEGY", "impersonate_fallback")
    return monkeypatch


@pytest.fixture
def rewriter(monkeypatch):
    fake = FakeRewriter()
    monkeypatch.setattr(slack_handler, "get_rewriter", lambda settings: fake)
    return fake


@pytest.fixture
def messenger(monkeypatch):
    fake = FakeMessenger()
    monkeypatch.setattr(slack_handler, "get_messenger", lambda settings: fake)
    return fake


def signed_headers(body: str, secret: str = SIGNING_SECRET, timestamp: int | None = None) -> dict:
    ts = str(timestamp if timestamp is not None else int(time.time()))
    signature = SignatureVerifier(signing_secret=secret).generate_signature(timestamp=ts, body=body)
    return {
        "Content-Type": "application/x-www-form-urlencoded",
        "X-Slack-Request-Timestamp": ts,
        "X-Slack-Signature": signature,
    }


def command_body(**fields) -> str:
    payload = {
        "command": "/trumpify",
        "text": "the economy is struggling",
        "user_id": "U123",
        "user_name": "jane",
        "channel_id": "C456",
        "response_url": "https://hooks.slack.com/commands/T1/2/abc",
    }
    payload.update(fields)
    return urlencode({k: v for k, v in payload.items() if v is not None})


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http
    await drain_background()


@pytest.fixture
def post_command(client):
    async def _post(body: str | None = None, **fields) -> httpx.Response:
        body = body if body is not None else command_body(**fields)
        return await client.post(COMMAND_URL, content=body, headers=signed_headers(body))

    return _post
