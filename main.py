"""Serverless entry points for the LeetCode Discord bot.

``main`` is the DigitalOcean-style function taking the raw event dict. The
``@http`` functions are Cloud Functions (Functions Framework) targets.
"""
import base64

from flask import Request, jsonify, make_response
from functions_framework import http

from leetcode_bot.config import Config
from leetcode_bot.discord_service import DiscordService
from leetcode_bot.handler import handle_event
from leetcode_bot.health import health_status
from leetcode_bot.observability import init_observability

logger, _ = init_observability('leetcode-bot-functions')


def main(event, context=None):
    """Handle a Discord interaction event."""
    return handle_event(event)


def event_from_request(request: Request) -> dict:
    """Wrap a Flask request into the event shape ``handle_event`` expects."""
    return {
        'http': {
            'method': request.method,
            'headers': dict(request.headers),
            'body': base64.b64encode(request.get_data()).decode('ascii'),
            'isBase64Encoded': True,
            'path': request.path,
            'queryString': request.query_string.decode('utf-8', 'replace')
        }
    }


@http
def discord_interactions(request: Request):
    """Cloud Functions target for the Discord interactions endpoint."""
    result = handle_event(event_from_request(request))
    if not result:
        return make_response('', 200)

    response = make_response(jsonify(result.get('body')), result.get('statusCode', 200))
    response.headers.update(result.get('headers') or {})
    return response


@http
def health_check(request: Request):
    """Health check endpoint."""
    if request.method not in ['GET', 'OPTIONS']:
        return jsonify({'error': 'Method not allowed'}), 405

    if request.method == 'OPTIONS':
        return '', 200

    return jsonify(health_status()), 200


@http
def register_commands(request: Request):
    """Register the bot's slash commands with Discord."""
    if request.method != 'POST':
        return jsonify({'error': 'Method not allowed'}), 405

    if not Config.DISCORD_BOT_TOKEN or not Config.DISCORD_APPLICATION_ID:
        logger.error("Command registration requested without Discord credentials")
        return jsonify({
            'error': 'DISCORD_BOT_TOKEN and DISCORD_APPLICATION_ID must be configured'
        }), 500

    results = DiscordService.register_all_commands()
    failed = [r['command'] for r in results if r['status'] != 'success']
    logger.info("Command registration completed", registered=len(results) - len(failed), failed=failed)

    return jsonify({
        'message': 'Registration completed',
        'results': results,
        'note': 'Commands may take a few minutes to appear in Discord'
    }), 200
