"""Request pipeline for the Discord interactions function.

The invoking platform hands over an event of the form::

    {"http": {"method": "POST", "headers": {...}, "body": "...",
              "isBase64Encoded": false, "path": "", "queryString": ""}}

and expects back ``{"statusCode", "headers", "body"}``. An empty dict means
the interaction was already answered through the Discord API.
"""
import base64
import binascii
import json
from typing import Dict, Mapping, Optional, Tuple

from .discord_service import DiscordService
from .interaction_handler import InteractionHandler
from .observability import get_correlation_id, init_observability, traced_function
from .response_utils import respond_error

logger, _ = init_observability('leetcode-bot')

SIGNATURE_HEADER = 'x-signature-ed25519'
TIMESTAMP_HEADER = 'x-signature-timestamp'


def normalize_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Lower-case header names so lookups are case-insensitive."""
    return {str(key).lower(): value for key, value in (headers or {}).items()}


def read_body(http: dict) -> bytes:
    """Raw request body, base64-decoded when the platform encoded it.

    Raises:
        ValueError: the body claims to be base64 but is not
    """
    body = http.get('body') or ''
    raw = body.encode('utf-8') if isinstance(body, str) else bytes(body)
    if http.get('isBase64Encoded'):
        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise ValueError("body is not valid base64") from e
    return raw


def parse_interaction(body: bytes) -> Tuple[Optional[dict], Optional[str]]:
    """Decode the interaction JSON, returning (interaction, error)."""
    try:
        interaction = json.loads(body)
    except ValueError as e:
        return None, str(e)
    if not isinstance(interaction, dict):
        return None, 'interaction payload is not an object'
    return interaction, None


@traced_function("discord_interaction")
def handle_event(event: dict) -> dict:
    """Verify, decode and answer one Discord interaction event."""
    http = (event or {}).get('http') or {}
    headers = normalize_headers(http.get('headers'))
    correlation_id = get_correlation_id(headers)

    logger.info("Request received", correlation_id=correlation_id, method=http.get('method'))
    try:
        response = _handle(http, headers, correlation_id)
    except Exception as e:
        logger.error("Unhandled error processing interaction", error=e, correlation_id=correlation_id)
        response = respond_error(500)
    logger.info("Request complete", correlation_id=correlation_id, status_code=response.get('statusCode', 200))
    return response


def _handle(http: dict, headers: Dict[str, str], correlation_id: str) -> dict:
    method = (http.get('method') or '').upper()
    if method != 'POST':
        logger.warning("Method not allowed", correlation_id=correlation_id, method=method)
        return respond_error(405)

    try:
        body = read_body(http)
    except ValueError as e:
        logger.warning("Could not read request body", correlation_id=correlation_id, detail=str(e))
        return respond_error(400)

    signature = headers.get(SIGNATURE_HEADER)
    timestamp = headers.get(TIMESTAMP_HEADER)
    if not DiscordService.verify_signature(signature, timestamp, body):
        logger.warning(
            "Request verification failed",
            correlation_id=correlation_id,
            signature_present=bool(signature),
            timestamp_present=bool(timestamp)
        )
        return respond_error(401)

    interaction, error = parse_interaction(body)
    if interaction is None:
        logger.warning("Invalid interaction payload", correlation_id=correlation_id, detail=error)
        return respond_error(400)

    return InteractionHandler.process(interaction, correlation_id)
