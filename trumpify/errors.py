# -*- coding: utf-8 -*-
"""Error types raised while handling a slash command.

Every error carries a machine-checkable ``code`` so callers branch on the
type or the code, never on message text.
"""

CHANNEL_ACCESS_CODES = frozenset({"not_in_channel", "channel_not_found"})


class TrumpifyError(Exception):
    code = "error"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ConfigurationError(TrumpifyError):
    code = "configuration"


class ValidationError(TrumpifyError):
    code = "invalid_command"


class RewriteError(TrumpifyError):
    code = "provider_error"


class MessagingError(TrumpifyError):
    code = "messaging_error"

    def __init__(self, message: str, code: str | None = None, method: str | None = None):
        super().__init__(message, code)
        self.method = method

    @classmethod
    def from_slack(cls, err, method: str) -> "MessagingError":
        """Build the matching error from a ``slack_sdk`` ``SlackApiError``."""
        response = getattr(err, "response", None)
        code = None
        if response is not None:
            try:
                code = response.get("error")
            except AttributeError:
                code = None
        code = code or cls.code
        error_cls = ChannelAccessError if code in CHANNEL_ACCESS_CODES else MessagingError
        return error_cls(f"Slack {method} failed: {code}", code=code, method=method)


class ChannelAccessError(MessagingError):
    """The bot cannot post into the target channel."""

    code = "not_in_channel"
