"""Discord slash-command bot serving random LeetCode problems."""

__version__ = "1.0.0"
