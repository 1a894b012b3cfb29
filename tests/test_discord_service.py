"""Tests for signature verification and Discord API calls."""
from unittest.mock import patch

import pytest
import requests

from leetcode_bot.config import COMMANDS, Config
from leetcode_bot.discord_service import DiscordService
from leetcode_bot.exceptions import DiscordAPIError
from tests.conftest import TIMESTAMP, command_interaction, http_response, sign

BODY = b'{"type": 1}'


def test_valid_signature(signing_key):
    assert DiscordService.verify_signature(sign(signing_key, TIMESTAMP, BODY), TIMESTAMP, BODY)


def test_tampered_body_fails(signing_key):
    signature = sign(signing_key, TIMESTAMP, BODY)
    assert not DiscordService.verify_signature(signature, TIMESTAMP, b'{"type": 2}')


def test_different_timestamp_fails(signing_key):
    signature = sign(signing_key, TIMESTAMP, BODY)
    assert not DiscordService.verify_signature(signature, '1700000001', BODY)


def test_non_hex_signature_fails():
    assert not DiscordService.verify_signature('not-hex', TIMESTAMP, BODY)


def test_missing_headers_fail(signing_key):
    assert not DiscordService.verify_signature(None, TIMESTAMP, BODY)
    assert not DiscordService.verify_signature(sign(signing_key, TIMESTAMP, BODY), None, BODY)


def test_missing_public_key_fails(monkeypatch, signing_key):
    monkeypatch.setattr(Config, 'DISCORD_PUBLIC_KEY', None)
    assert not DiscordService.verify_signature(sign(signing_key, TIMESTAMP, BODY), TIMESTAMP, BODY)


def test_malformed_public_key_fails(monkeypatch, signing_key):
    monkeypatch.setattr(Config, 'DISCORD_PUBLIC_KEY', 'abcd')
    assert not DiscordService.verify_signature(sign(signing_key, TIMESTAMP, BODY), TIMESTAMP, BODY)


def test_respond_to_interaction_posts_callback():
    interaction = command_interaction()
    payload = {'type': 4, 'data': {'content': 'https://leetcode.com/problems/two-sum'}}

    with patch('leetcode_bot.discord_service.requests.post', return_value=http_response(204)) as post:
        DiscordService.respond_to_interaction(interaction, payload)

    args, kwargs = post.call_args
    assert args[0] == 'https://discord.com/api/v10/interactions/interaction-1/interaction-token/callback'
    assert kwargs['json'] == payload
    assert kwargs['headers']['Authorization'] == 'Bot test-bot-token'


def test_respond_to_interaction_rejected():
    with patch('leetcode_bot.discord_service.requests.post', return_value=http_response(400, text='bad')):
        with pytest.raises(DiscordAPIError) as excinfo:
            DiscordService.respond_to_interaction(command_interaction(), {'type': 4})
    assert excinfo.value.status_code == 400


def test_respond_to_interaction_unreachable():
    with patch('leetcode_bot.discord_service.requests.post', side_effect=requests.Timeout('slow')):
        with pytest.raises(DiscordAPIError):
            DiscordService.respond_to_interaction(command_interaction(), {'type': 4})


def test_register_command_success():
    with patch('leetcode_bot.discord_service.requests.post', return_value=http_response(201, {})) as post:
        result = DiscordService.register_command(COMMANDS[0])

    assert result['status'] == 'success'
    assert post.call_args[0][0] == 'https://discord.com/api/v10/applications/1234567890/commands'


def test_register_command_without_credentials(monkeypatch):
    monkeypatch.setattr(Config, 'DISCORD_APPLICATION_ID', None)
    with patch('leetcode_bot.discord_service.requests.post') as post:
        result = DiscordService.register_command(COMMANDS[0])
    assert result['status'] == 'error'
    post.assert_not_called()


def test_register_all_commands_reports_each_command():
    with patch('leetcode_bot.discord_service.requests.post', return_value=http_response(500, text='boom')):
        results = DiscordService.register_all_commands()

    assert [r['command'] for r in results] == [c['name'] for c in COMMANDS]
    assert all(r['status'] == 'error' for r in results)
