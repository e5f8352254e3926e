# -*- coding: utf-8 -*-
"""Thin async wrapper over the Slack Web API calls the command needs."""

import logging
from dataclasses import dataclass

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient
from slack_sdk.webhook.async_client import AsyncWebhookClient

from .errors import MessagingError

logger = logging.getLogger("trumpify")


@dataclass(frozen=True)
class UserIdentity:
    name: str
    avatar_url: str | None = None


class SlackMessenger:
    def __init__(self, client: AsyncWebClient, webhook_factory=AsyncWebhookClient):
        self.client = client
        self.webhook_factory = webhook_factory

    @classmethod
    def from_settings(cls, settings) -> "SlackMessenger":
        if not settings.bot_token:
            logger.warning("SLACK_BOT_TOKEN not set; Web API calls will fail")
        return cls(AsyncWebClient(token=settings.bot_token))

    async def user_identity(self, user_id: str) -> UserIdentity:
        try:
            resp = await self.client.users_info(user=user_id)
        except SlackApiError as e:
            raise MessagingError.from_slack(e, "users.info") from e

        user = resp.get("user") or {}
        profile = user.get("profile") or {}
        name = (
            profile.get("display_name")
            or profile.get("real_name")
            or user.get("real_name")
            or user.get("name")
            or user_id
        )
        avatar = profile.get("image_192") or profile.get("image_72")
        return UserIdentity(name=name, avatar_url=avatar)

    async def post_message(
        self,
        channel: str,
        text: str,
        thread_ts: str | None = None,
        username: str | None = None,
        icon_url: str | None = None,
    ) -> str | None:
        """Post into ``channel`` and return the new message ``ts``."""
        msg = {"channel": channel, "text": text, "unfurl_links": False, "unfurl_media": False}
        if thread_ts:
            msg["thread_ts"] = thread_ts
        if username:
            msg["username"] = username
        if icon_url:
            msg["icon_url"] = icon_url

        try:
            resp = await self.client.chat_postMessage(**msg)
        except SlackApiError as e:
            raise MessagingError.from_slack(e, "chat.postMessage") from e
        return resp.get("ts")

    async def post_ephemeral(self, channel: str, user: str, text: str, thread_ts: str | None = None) -> None:
        msg = {"channel": channel, "user": user, "text": text}
        if thread_ts:
            msg["thread_ts"] = thread_ts

        try:
            await self.client.chat_postEphemeral(**msg)
        except SlackApiError as e:
            raise MessagingError.from_slack(e, "chat.postEphemeral") from e

    async def respond(
        self,
        response_url: str,
        text: str,
        response_type: str = "in_channel",
        thread_ts: str | None = None,
    ) -> None:
        body = {"response_type": response_type, "text": text}
        if thread_ts:
            body["thread_ts"] = thread_ts

        resp = await self.webhook_factory(response_url).send_dict(body)
        if resp.status_code != 200:
            logger.error("response_url rejected status=%s body=%s", resp.status_code, resp.body)
            raise MessagingError(
                f"Slack response_url failed: {resp.status_code} {resp.body}",
                code="response_url_failed",
                method="response_url",
            )
