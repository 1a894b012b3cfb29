"""Registry for Discord command handlers."""
from typing import Callable, Dict

EPHEMERAL = 64


class CommandHandler:
    """Handler for Discord slash commands."""

    HANDLERS: Dict[str, Callable[[dict], dict]] = {}

    @classmethod
    def register(cls, command_name: str):
        """Decorator to register a command handler."""
        def decorator(func):
            cls.HANDLERS[command_name] = func
            return func
        return decorator

    @classmethod
    def handle(cls, command_name: str, interaction: dict) -> dict:
        """Handle a command by name.

        Args:
            command_name: Name of the command
            interaction: Full interaction payload, for access to options

        Returns:
            Discord interaction response dict
        """
        handler = cls.HANDLERS.get(command_name)
        if handler:
            return handler(interaction)
        return {
            'type': 4,
            'data': {
                'content': f'Command `/{command_name}` is not recognized.',
                'flags': EPHEMERAL
            }
        }
