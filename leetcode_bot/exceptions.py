"""Exceptions raised by the bot's outbound clients."""
from typing import Optional


class LeetCodeBotError(Exception):
    """Base error for the bot."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LeetCodeError(LeetCodeBotError):
    """The LeetCode GraphQL API call failed or returned no question."""


class DiscordAPIError(LeetCodeBotError):
    """The Discord REST API rejected a call or could not be reached."""
