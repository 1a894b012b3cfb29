"""Application configuration."""
import os


class Config:
    """Application configuration."""
    DISCORD_PUBLIC_KEY = os.environ.get('DISCORD_APP_PUBLIC_KEY', os.environ.get('DISCORD_PUBLIC_KEY'))
    DISCORD_BOT_TOKEN = os.environ.get('DISCORD_TOKEN', os.environ.get('DISCORD_BOT_TOKEN'))
    DISCORD_APPLICATION_ID = os.environ.get('DISCORD_APPLICATION_ID')
    DISCORD_API_BASE_URL = "https://discord.com/api/v10"
    DISCORD_TIMEOUT = float(os.environ.get('DISCORD_TIMEOUT', '5'))

    LEETCODE_BASE_URL = os.environ.get('LEETCODE_BASE_URL', 'https://leetcode.com').rstrip('/')
    LEETCODE_TIMEOUT = float(os.environ.get('LEETCODE_TIMEOUT', '15'))

    SERVICE_NAME = 'leetcode-bot'
    ENVIRONMENT = os.environ.get('ENVIRONMENT', 'production')
    LOCAL_DEV = bool(os.environ.get('LOCAL_DEV'))
    GCP_PROJECT_ID = os.environ.get('GCP_PROJECT_ID', os.environ.get('GOOGLE_CLOUD_PROJECT'))


# Discord commands definition
COMMANDS = [
    {
        "name": "leetcode",
        "description": "Get a random LeetCode problem",
        "type": 1,
        "options": [
            {
                "name": "difficulty",
                "description": "Problem difficulty (random when omitted)",
                "type": 3,
                "required": False,
                "choices": [
                    {"name": "Easy", "value": "easy"},
                    {"name": "Medium", "value": "medium"},
                    {"name": "Hard", "value": "hard"}
                ]
            }
        ]
    }
]
