"""Handlers for Discord slash commands."""
from typing import Optional

from .command_registry import CommandHandler
from .leetcode import Difficulty, LeetCodeClient, random_difficulty

CHANNEL_MESSAGE_WITH_SOURCE = 4


def get_option(interaction: dict, name: str) -> Optional[str]:
    """Value of the first command option called ``name``."""
    for option in (interaction.get('data') or {}).get('options') or []:
        if option.get('name') == name:
            value = option.get('value')
            return None if value is None else str(value)
    return None


def resolve_difficulty(interaction: dict) -> Difficulty:
    """Requested difficulty, or a random one when absent or unrecognised."""
    return Difficulty.parse(get_option(interaction, 'difficulty')) or random_difficulty()


@CommandHandler.register('leetcode')
def handle_leetcode(interaction: dict) -> dict:
    """Reply with a link to a random LeetCode problem."""
    with LeetCodeClient() as client:
        title_slug = client.random_question(resolve_difficulty(interaction))
        url = client.problem_url(title_slug)
    return {
        'type': CHANNEL_MESSAGE_WITH_SOURCE,
        'data': {
            'content': url
        }
    }
