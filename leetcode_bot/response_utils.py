"""Response utilities."""
from http import HTTPStatus
from typing import Any

JSON_HEADERS = {'Content-Type': 'application/json'}


def respond(status_code: int, body: Any) -> dict:
    """Build a function response with a JSON body."""
    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': body
    }


def respond_error(status_code: int) -> dict:
    """Build an error response carrying the status' reason phrase."""
    return respond(status_code, {'error': HTTPStatus(status_code).phrase})
