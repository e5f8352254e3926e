# -*- coding: utf-8 -*-
"""Ways of delivering a rewritten message back into Slack.

Exactly one strategy is active per deployment (``RESPONSE_STRATEGY``):

* ``relay``                - reply through the command's ``response_url``
* ``impersonate``          - post into the channel as the invoking user
* ``paired``               - ack at once, then post rewritten + original as a thread
* ``impersonate_fallback`` - impersonate, degrade to an ephemeral reply when the
  bot is not allowed in the channel
"""

import asyncio
import logging

from .commands import CommandReply, SlashCommand
from .errors import ChannelAccessError, ConfigurationError, ValidationError
from .prompts import PAIRED_LABEL, PAIRED_ORIGINAL, error_text, fallback_text

logger = logging.getLogger("trumpify")

# strong refs, otherwise the loop may drop a running task
_background_tasks: set = set()


def spawn_background(coro) -> asyncio.Task:
    task = asyncio.create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


async def drain_background() -> None:
    """Wait for every background unit started so far."""
    while _background_tasks:
        await asyncio.gather(*list(_background_tasks), return_exceptions=True)


class DispatchStrategy:
    name = ""

    def __init__(self, rewriter, messenger):
        self.rewriter = rewriter
        self.messenger = messenger

    async def dispatch(self, command: SlashCommand) -> CommandReply:
        raise NotImplementedError


class RelayStrategy(DispatchStrategy):
    name = "relay"

    async def dispatch(self, command):
        if not command.response_url:
            raise ValidationError("Missing response_url in command payload")

        rewritten = await self.rewriter.rewrite(command.text)
        await self.messenger.respond(
            command.response_url,
            rewritten,
            response_type="in_channel",
            thread_ts=command.thread_ts,
        )
        logger.info("Relayed rewrite via response_url user=%s", command.user_id)
        return CommandReply.empty()


class ImpersonateStrategy(DispatchStrategy):
    name = "impersonate"

    async def dispatch(self, command):
        command.require_channel()
        rewritten = await self.rewriter.rewrite(command.text)
        await self._post_as_user(command, rewritten)
        return CommandReply.empty()

    async def _post_as_user(self, command, text):
        identity = await self.messenger.user_identity(command.user_id)
        await self.messenger.post_message(
            command.channel_id,
            text,
            thread_ts=command.thread_ts,
            username=identity.name,
            icon_url=identity.avatar_url,
        )
        logger.info("Posted as %s in %s thread=%s", identity.name, command.channel_id, command.thread_ts)


class ImpersonateWithFallbackStrategy(ImpersonateStrategy):
    name = "impersonate_fallback"

    async def dispatch(self, command):
        command.require_channel()
        rewritten = await self.rewriter.rewrite(command.text)
        try:
            await self._post_as_user(command, rewritten)
        except ChannelAccessError as e:
            logger.warning("Cannot post in %s (%s); replying ephemerally", command.channel_id, e.code)
            return CommandReply.ephemeral(fallback_text(command.text, rewritten))
        return CommandReply.empty()


class PairedReplyStrategy(DispatchStrategy):
    name = "paired"

    async def dispatch(self, command):
        command.require_channel()
        spawn_background(self._run(command))
        return CommandReply.empty()

    async def _run(self, command):
        try:
            rewritten = await self.rewriter.rewrite(command.text)
            identity = await self.messenger.user_identity(command.user_id)

            parent_ts = await self.messenger.post_message(
                command.channel_id,
                PAIRED_LABEL.format(name=identity.name, text=rewritten),
                thread_ts=command.thread_ts,
            )
            await self.messenger.post_message(
                command.channel_id,
                PAIRED_ORIGINAL.format(text=command.text),
                thread_ts=command.thread_ts or parent_ts,
            )
        except Exception as e:
            logger.exception("Background rewrite failed user=%s", command.user_id)
            await self._notify_failure(command, e)

    async def _notify_failure(self, command, error):
        try:
            await self.messenger.post_ephemeral(
                command.channel_id,
                command.user_id,
                error_text(error),
                thread_ts=command.thread_ts,
            )
        except Exception:
            logger.exception("Failed to notify user=%s about background failure", command.user_id)


STRATEGIES = {
    cls.name: cls
    for cls in (RelayStrategy, ImpersonateStrategy, PairedReplyStrategy, ImpersonateWithFallbackStrategy)
}


def build_strategy(name: str, rewriter, messenger) -> DispatchStrategy:
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown response strategy {name!r}") from None
    return strategy_cls(rewriter, messenger)
