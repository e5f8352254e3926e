# -*- coding: utf-8 -*-
"""Wrapper around the Gemini generative model used for rewriting."""

import logging
from functools import lru_cache

from google import genai
from google.genai import types

from .config import GEMINI_MODEL, MAX_OUTPUT_TOKENS, TEMPERATURE, VERTEX_LOCATION
from .errors import RewriteError
from .prompts import TRUMP_SYSTEM_PROMPT

logger = logging.getLogger("trumpify")


@lru_cache(maxsize=4)
def _cached_client(api_key: str | None, project: str | None) -> genai.Client:
    if api_key:
        return genai.Client(api_key=api_key)
    logger.warning("GEMINI_API_KEY not set; relying on Vertex AI ambient creds")
    return genai.Client(vertexai=True, project=project, location=VERTEX_LOCATION)


def build_client(settings) -> genai.Client:
    """One client (and one connection pool) per key/project for the whole process."""
    return _cached_client(settings.gemini_api_key, settings.google_project)


class Rewriter:
    def __init__(self, client, model: str = GEMINI_MODEL):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings) -> "Rewriter":
        return cls(build_client(settings))

    async def rewrite(self, text: str) -> str:
        """Return ``text`` rewritten in style, or ``text`` itself if the model gives nothing back."""
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=text,
                config=types.GenerateContentConfig(
                    system_instruction=TRUMP_SYSTEM_PROMPT,
                    temperature=TEMPERATURE,
                    max_output_tokens=MAX_OUTPUT_TOKENS,
                ),
            )
        except Exception as e:
            logger.exception("[rewrite] generate_content failed model=%s", self.model)
            raise RewriteError(f"Rewrite failed: {e}") from e

        content = (getattr(resp, "text", None) or "").strip()
        if not content:
            logger.warning("[rewrite] empty completion, returning original text")
            return text
        logger.info("[rewrite] OK chars_in=%d chars_out=%d", len(text), len(content))
        return content
