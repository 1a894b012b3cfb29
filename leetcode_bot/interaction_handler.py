"""Handler for Discord interactions."""
from typing import Optional

from . import command_handlers  # noqa: F401  registers command handlers
from .command_registry import CommandHandler
from .config import Config
from .discord_service import DiscordService
from .exceptions import DiscordAPIError, LeetCodeError
from .observability import init_observability, traced_function
from .response_utils import respond, respond_error

logger, _ = init_observability('leetcode-bot-interactions')

PING = 1
APPLICATION_COMMAND = 2
PONG = 1


class InteractionHandler:
    """Handler for Discord interactions."""

    @staticmethod
    def handle_ping() -> dict:
        """Handle Discord ping (type 1)."""
        return respond(200, {'type': PONG})

    @staticmethod
    def handle_application_command(interaction: dict, correlation_id: Optional[str] = None) -> dict:
        """Handle application command (type 2) and answer it through Discord."""
        if not Config.DISCORD_BOT_TOKEN:
            logger.error("Missing Discord bot token", correlation_id=correlation_id)
            return respond_error(500)

        data = interaction.get('data')
        if not isinstance(data, dict) or not interaction.get('id') or not interaction.get('token'):
            logger.warning("Invalid application command payload", correlation_id=correlation_id)
            return respond_error(400)

        command_context = {
            'command_id': data.get('id'),
            'command_name': data.get('name'),
            'target_id': data.get('target_id'),
        }

        try:
            response = CommandHandler.handle(data.get('name'), interaction)
        except LeetCodeError as e:
            logger.error("Could not fetch LeetCode problem", error=e, correlation_id=correlation_id)
            return respond_error(500)

        logger.info("Responding to interaction", correlation_id=correlation_id, **command_context)

        try:
            DiscordService.respond_to_interaction(interaction, response)
        except DiscordAPIError as e:
            logger.error(
                "Failed responding to interaction",
                error=e,
                correlation_id=correlation_id,
                **command_context
            )
            return respond_error(500)

        return {}

    @staticmethod
    @traced_function("process_interaction")
    def process(interaction: dict, correlation_id: Optional[str] = None) -> dict:
        """Process a verified Discord interaction."""
        interaction_type = interaction.get('type')

        if interaction_type == PING:
            logger.info("Acknowledging interaction", correlation_id=correlation_id, interaction_type=interaction_type)
            return InteractionHandler.handle_ping()

        if interaction_type != APPLICATION_COMMAND:
            logger.warning("Unsupported interaction type", correlation_id=correlation_id, interaction_type=interaction_type)
            return respond_error(400)

        return InteractionHandler.handle_application_command(interaction, correlation_id)
