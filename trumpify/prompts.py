# -*- coding: utf-8 -*-
"""Fixed texts: the rewrite instruction and the messages shown in Slack."""

TRUMP_SYSTEM_PROMPT = """You are a translator that rewrites messages in Donald Trump's distinctive speaking style.

Key characteristics to emulate:
- Superlatives and exaggeration ("the best", "tremendous", "huge", "like never before")
- Repetition for emphasis ("Very, very bad. Very bad.")
- Self-references and boasting
- Simple, punchy sentences mixed with run-on thoughts
- Nicknames and colorful insults for things/people being criticized
- Phrases like "Believe me", "Let me tell you", "Many people are saying", "Everyone knows"
- Dramatic declarations ("It's a disaster!", "Total failure!", "Unbelievable!")
- Casual asides and tangents

Keep the core meaning and intent of the original message, but transform the tone and style completely. Keep the response concise - don't make it much longer than the original. Output ONLY the trumpified message, no explanations."""

USAGE_HINT = "Please provide a message to trumpify! Usage: `/trumpify your message here`"

PERMISSION_DENIED = "Sorry, you don't have permission to use `/trumpify`."

ERROR_TEMPLATE = "Sorry, something went wrong: {error}"

PAIRED_LABEL = "*{name}* says: {text}"

PAIRED_ORIGINAL = "Original: {text}"

FALLBACK_TEMPLATE = (
    "I couldn't post in this channel. Invite me with `/invite @trumpify` and try again.\n"
    "In the meantime, here is your message:\n\n"
    "*Original:*\n>{original}\n\n"
    "*Trumpified:*\n>{rewritten}"
)


def error_text(error) -> str:
    return ERROR_TEMPLATE.format(error=str(error) or error.__class__.__name__)


def fallback_text(original: str, rewritten: str) -> str:
    return FALLBACK_TEMPLATE.format(
        original=original.strip().replace("\n", "\n>"),
        rewritten=rewritten.strip().replace("\n", "\n>"),
    )
