"""Shared fixtures for the bot's tests."""
import base64
import json
import os
from unittest.mock import MagicMock

os.environ.setdefault('LOCAL_DEV', '1')

import pytest  # noqa: E402
from nacl.encoding import HexEncoder  # noqa: E402
from nacl.signing import SigningKey  # noqa: E402

from leetcode_bot.config import Config  # noqa: E402

TIMESTAMP = '1700000000'


@pytest.fixture
def signing_key():
    return SigningKey.generate()


@pytest.fixture(autouse=True)
def discord_config(monkeypatch, signing_key):
    """Configure a known key pair and bot token for every test."""
    monkeypatch.setattr(Config, 'DISCORD_PUBLIC_KEY', signing_key.verify_key.encode(encoder=HexEncoder).decode())
    monkeypatch.setattr(Config, 'DISCORD_BOT_TOKEN', 'test-bot-token')
    monkeypatch.setattr(Config, 'DISCORD_APPLICATION_ID', '1234567890')
    monkeypatch.setattr(Config, 'LEETCODE_BASE_URL', 'https://leetcode.com')


def sign(signing_key, timestamp: str, body: bytes) -> str:
    return signing_key.sign(timestamp.encode() + body).signature.hex()


@pytest.fixture
def make_event(signing_key):
    """Build a signed platform event around an interaction payload."""
    def _make_event(payload, method='POST', headers=None, sign_body=True, base64_body=False):
        body = payload if isinstance(payload, (bytes, str)) else json.dumps(payload)
        raw = body.encode() if isinstance(body, str) else body
        event_headers = {'content-type': 'application/json'}
        if sign_body:
            event_headers['x-signature-ed25519'] = sign(signing_key, TIMESTAMP, raw)
            event_headers['x-signature-timestamp'] = TIMESTAMP
        event_headers.update(headers or {})
        return {
            'http': {
                'method': method,
                'headers': event_headers,
                'body': base64.b64encode(raw).decode() if base64_body else raw.decode(),
                'isBase64Encoded': base64_body,
                'path': '',
                'queryString': ''
            }
        }
    return _make_event


def http_response(status_code=200, payload=None, text=''):
    """Stand-in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text or (json.dumps(payload) if payload is not None else '')
    if payload is None:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = payload
    return response


def command_interaction(options=None, name='leetcode'):
    data = {'id': 'cmd-1', 'name': name, 'type': 1}
    if options is not None:
        data['options'] = options
    return {
        'id': 'interaction-1',
        'application_id': '1234567890',
        'type': 2,
        'token': 'interaction-token',
        'data': data
    }
