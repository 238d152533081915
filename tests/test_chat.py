"""Tests for the Gemini chat relay."""

from unittest.mock import Mock, patch

import pytest
import requests

from utils.chat import relay_chat, filter_reply, build_system_prompt, extract_reply, FALLBACK_REPLY
from utils.data import load_data
from utils.errors import BadRequestError


def gemini_response(payload=None, json_error=None, status_error=None):
    response = Mock()
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    if status_error:
        response.raise_for_status.side_effect = status_error
    return response


def test_filter_reply_drops_markers_and_blank_lines():
    text = "START\nHello there\n\n   \nStop here\nSubham builds web apps\nstopwatch"
    assert filter_reply(text) == 'Hello there\nSubham builds web apps'


def test_filter_reply_handles_empty_text():
    assert filter_reply('') == ''
    assert filter_reply(None) == ''


@pytest.mark.parametrize('message', ['', '   ', None, 42])
def test_relay_rejects_empty_message(app_ctx, message):
    with patch('utils.chat.requests.post') as post:
        with pytest.raises(BadRequestError, match='No message provided'):
            relay_chat(message)
    post.assert_not_called()


def test_relay_returns_first_candidate_text(app_ctx):
    payload = {'candidates': [{'content': {'parts': [{'text': 'Subham knows React.'}]}}]}
    with patch('utils.chat.requests.post', return_value=gemini_response(payload)) as post:
        assert relay_chat('What do you know?') == 'Subham knows React.'

    args, kwargs = post.call_args
    assert 'gemini-2.0-flash:generateContent' in args[0]
    assert kwargs['params'] == {'key': 'test-key'}
    assert kwargs['timeout'] == 20
    assert kwargs['json']['contents'][0]['parts'][0]['text'] == 'What do you know?'


def test_relay_falls_back_on_malformed_json(app_ctx):
    with patch('utils.chat.requests.post',
               return_value=gemini_response(json_error=ValueError('bad json'))):
        assert relay_chat('Hello') == FALLBACK_REPLY


def test_relay_falls_back_on_missing_candidates(app_ctx):
    with patch('utils.chat.requests.post', return_value=gemini_response({'candidates': []})):
        assert relay_chat('Hello') == FALLBACK_REPLY


def test_relay_falls_back_on_transport_errors(app_ctx):
    with patch('utils.chat.requests.post', side_effect=requests.Timeout('timed out')):
        assert relay_chat('Hello') == FALLBACK_REPLY

    error = requests.HTTPError('429 Too Many Requests')
    with patch('utils.chat.requests.post', return_value=gemini_response(status_error=error)):
        assert relay_chat('Hello') == FALLBACK_REPLY


def test_relay_without_api_key_skips_upstream(app_ctx):
    app_ctx.config['GEMINI_API_KEY'] = None
    with patch('utils.chat.requests.post') as post:
        assert relay_chat('Hello') == FALLBACK_REPLY
    post.assert_not_called()


def test_extract_reply_tolerates_odd_shapes():
    assert extract_reply(None) is None
    assert extract_reply({'candidates': [{'content': {}}]}) is None
    assert extract_reply({'candidates': [{'content': {'parts': [{'text': ''}]}}]}) is None


def test_system_prompt_lists_enabled_content_only(app_ctx):
    prompt = build_system_prompt(load_data())
    assert 'Subham Mahapatra' in prompt
    assert 'ChainVote' in prompt
    assert 'Smart Greenhouse' not in prompt
    assert 'jQuery' not in prompt
    assert 'Legacy Maintenance' not in prompt
