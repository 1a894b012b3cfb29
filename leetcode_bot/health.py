"""Health check for the bot's functions."""
from datetime import datetime, timezone

from .config import Config


def health_status() -> dict:
    """Report service liveness and which secrets are configured."""
    return {
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': Config.SERVICE_NAME,
        'environment': {
            'public_key_set': bool(Config.DISCORD_PUBLIC_KEY),
            'bot_token_set': bool(Config.DISCORD_BOT_TOKEN),
            'app_id_set': bool(Config.DISCORD_APPLICATION_ID)
        }
    }
