"""Service for Discord API interactions."""
from typing import List

import requests
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from .config import Config, COMMANDS
from .exceptions import DiscordAPIError
from .observability import init_observability, traced_function

logger, _ = init_observability('leetcode-bot-discord')


class DiscordService:
    """Service for Discord API interactions."""

    @staticmethod
    def verify_signature(signature: str, timestamp: str, body: bytes) -> bool:
        """Verify Discord request signature."""
        if not Config.DISCORD_PUBLIC_KEY:
            logger.warning("Discord public key not configured")
            return False

        if not signature or not timestamp:
            return False

        try:
            verify_key = VerifyKey(bytes.fromhex(Config.DISCORD_PUBLIC_KEY))
            message = timestamp.encode() + body
            verify_key.verify(message, bytes.fromhex(signature))
            return True
        except (BadSignatureError, ValueError, TypeError) as e:
            logger.warning("Signature verification failed", error_type=type(e).__name__, detail=str(e))
            return False

    @staticmethod
    def _auth_headers() -> dict:
        return {
            "Authorization": f"Bot {Config.DISCORD_BOT_TOKEN}",
            "Content-Type": "application/json"
        }

    @staticmethod
    @traced_function("discord_interaction_respond")
    def respond_to_interaction(interaction: dict, response: dict) -> None:
        """Send an interaction response through the callback endpoint.

        Raises:
            DiscordAPIError: Discord could not be reached or rejected the response
        """
        url = (
            f"{Config.DISCORD_API_BASE_URL}/interactions/"
            f"{interaction['id']}/{interaction['token']}/callback"
        )

        try:
            result = requests.post(
                url,
                headers=DiscordService._auth_headers(),
                json=response,
                timeout=Config.DISCORD_TIMEOUT
            )
        except requests.RequestException as e:
            raise DiscordAPIError(f"Discord request failed: {e}") from e

        if result.status_code not in (200, 204):
            raise DiscordAPIError(
                f"Discord responded with status {result.status_code}: {result.text[:200]}",
                status_code=result.status_code
            )

    @staticmethod
    def register_command(command: dict) -> dict:
        """Register a single Discord command."""
        if not Config.DISCORD_BOT_TOKEN or not Config.DISCORD_APPLICATION_ID:
            return {'status': 'error', 'message': 'Discord tokens not configured'}

        url = f"{Config.DISCORD_API_BASE_URL}/applications/{Config.DISCORD_APPLICATION_ID}/commands"

        try:
            response = requests.post(
                url,
                headers=DiscordService._auth_headers(),
                json=command,
                timeout=Config.DISCORD_TIMEOUT
            )
        except requests.RequestException as e:
            logger.error("Command registration failed", error=e, command=command['name'])
            return {
                'status': 'error',
                'message': str(e)
            }

        if response.status_code in [200, 201]:
            return {
                'status': 'success',
                'message': f"Command '/{command['name']}' registered successfully"
            }
        return {
            'status': 'error',
            'message': f"Error: {response.status_code}",
            'details': response.text
        }

    @staticmethod
    def register_all_commands() -> List[dict]:
        """Register all Discord commands."""
        results = []
        for command in COMMANDS:
            result = DiscordService.register_command(command)
            if result['status'] == 'success':
                logger.info(result['message'])
            else:
                logger.warning("Failed to register command", command=command['name'], detail=result['message'])
            results.append({'command': command['name'], **result})
        return results
