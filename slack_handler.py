# -*- coding: utf-8 -*-
import logging

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from slack_sdk.signature import SignatureVerifier

from trumpify.commands import CommandReply, SlashCommand, decode_body
from trumpify.config import LOG_LEVEL, load_settings
from trumpify.errors import ConfigurationError
from trumpify.messaging import SlackMessenger
from trumpify.prompts import PERMISSION_DENIED, USAGE_HINT, error_text
from trumpify.rewriter import Rewriter
from trumpify.strategies import build_strategy

# ──────────────────────────────────────────────────────────────────────────────
# ENV / LOG
# ──────────────────────────────────────────────────────────────────────────────
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("slack")


def get_rewriter(settings) -> Rewriter:
    return Rewriter.from_settings(settings)


def get_messenger(settings) -> SlackMessenger:
    return SlackMessenger.from_settings(settings)


# ──────────────────────────────────────────────────────────────────────────────
# SHARED COMMAND PIPELINE (DEV + PROD)
# ──────────────────────────────────────────────────────────────────────────────
async def process_slack_command(payload: dict, settings=None) -> CommandReply:
    """
    Single entry point for a decoded /trumpify payload.
    Used by both the FastAPI route (PROD) and Socket Mode (DEV).
    """
    settings = settings or load_settings()
    command = SlashCommand.from_payload(payload)

    if command.is_url_verification:
        return CommandReply.challenge(command.challenge)

    if settings.allowed_user_ids and command.user_id not in settings.allowed_user_ids:
        logger.info(f"Rejected /trumpify from non-allowed user {command.user_id!r}")
        return CommandReply.ephemeral(PERMISSION_DENIED)

    if not command.has_text:
        return CommandReply.ephemeral(USAGE_HINT)

    try:
        strategy = build_strategy(settings.strategy, get_rewriter(settings), get_messenger(settings))
        logger.info(f"/trumpify from {command.user_id} in {command.channel_id} via {strategy.name}")
        return await strategy.dispatch(command)
    except Exception as e:
        logger.exception("Error processing /trumpify request")
        return CommandReply.ephemeral(error_text(e))


def render_reply(reply: CommandReply) -> Response:
    if reply.body is None:
        return Response(status_code=reply.status_code)
    return JSONResponse(status_code=reply.status_code, content=reply.body)


# ──────────────────────────────────────────────────────────────────────────────
# Slash Command HTTP Handler
# ──────────────────────────────────────────────────────────────────────────────
async def handle_command(req: Request) -> Response:

    if req.method != "POST":
        return PlainTextResponse("Method not allowed", status_code=405)

    raw_body = await req.body()
    payload = decode_body(raw_body, req.headers.get("content-type"))

    try:
        settings = load_settings()
    except ConfigurationError:
        logger.exception("Invalid configuration")
        return PlainTextResponse("Server configuration error", status_code=500)

    if not settings.signing_secret:
        logger.error("Missing SLACK_SIGNING_SECRET")
        return PlainTextResponse("Server configuration error", status_code=500)

    # runs ahead of the url_verification handshake: unsigned challenges get 401 too
    if settings.verify_signature:
        verifier = SignatureVerifier(signing_secret=settings.signing_secret)
        try:
            if not verifier.is_valid_request(raw_body, dict(req.headers)):
                logger.warning("Invalid Slack signature")
                return JSONResponse(status_code=401, content={"error": "invalid signature"})
        except Exception:
            logger.exception("Signature verification failed")
            return JSONResponse(status_code=401, content={"error": "invalid signature"})

    reply = await process_slack_command(payload, settings)
    return render_reply(reply)
