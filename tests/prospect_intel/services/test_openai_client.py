"""Tests for prospect_intel.services.openai_client — relevance scoring."""
import json
from unittest.mock import patch, MagicMock

import pytest

from prospect_intel.refresh.base import ProspectIdentity
from prospect_intel.services.openai_client import (
    FALLBACK_CATEGORY, FALLBACK_SCORE, FALLBACK_TIP, RelevanceScorer, make_openai_client,
)


def _mock_chat_response(content_dict_or_str):
    """Build a MagicMock that looks like openai ChatCompletion response."""
    if isinstance(content_dict_or_str, dict):
        text = json.dumps(content_dict_or_str)
    else:
        text = content_dict_or_str
    message = MagicMock()
    message.content = text
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


ARTICLE = {'title': 'Acme expands to Croatia', 'snippet': 'Acme opened a Zagreb office.'}
IDENTITY = ProspectIdentity(company='Acme', prospect_type='Media', country='Serbia')


class TestMakeOpenaiClient:

    def test_no_key_returns_none(self):
        assert make_openai_client(None) is None
        assert make_openai_client('') is None

    @patch('openai.OpenAI')
    def test_builds_client_with_key(self, mock_openai):
        client = make_openai_client('sk-test')
        mock_openai.assert_called_once_with(api_key='sk-test')
        assert client is mock_openai.return_value


class TestRelevanceScorer:

    def test_parses_response(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _mock_chat_response({
            'relevanceScore': 85, 'category': 'Expansion', 'aiTip': 'Congratulate them on Zagreb.',
        })
        result = RelevanceScorer(client).score(ARTICLE, IDENTITY)
        assert result == {'relevance_score': 85.0, 'category': 'Expansion',
                          'ai_tip': 'Congratulate them on Zagreb.'}

    def test_requests_json_mode_with_configured_model(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _mock_chat_response({'relevanceScore': 10})
        RelevanceScorer(client, model='gpt-4o').score(ARTICLE, IDENTITY)

        call_kwargs = client.chat.completions.create.call_args[1]
        assert call_kwargs['model'] == 'gpt-4o'
        assert call_kwargs['response_format'] == {'type': 'json_object'}
        prompt = call_kwargs['messages'][0]['content']
        assert 'Acme expands to Croatia' in prompt
        assert 'Company: Acme' in prompt
        assert 'Country: Serbia' in prompt

    def test_missing_fields_use_fallbacks(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _mock_chat_response({})
        result = RelevanceScorer(client).score(ARTICLE, IDENTITY)
        assert result['relevance_score'] == FALLBACK_SCORE
        assert result['category'] == FALLBACK_CATEGORY
        assert result['ai_tip'] == FALLBACK_TIP

    @pytest.mark.parametrize('raw,expected', [(150, 100.0), (-5, 0.0), ('72', 72.0), ('high', 50)])
    def test_score_is_clamped(self, raw, expected):
        client = MagicMock()
        client.chat.completions.create.return_value = _mock_chat_response({'relevanceScore': raw})
        assert RelevanceScorer(client).score(ARTICLE, IDENTITY)['relevance_score'] == expected

    def test_api_error_falls_back(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = Exception("API Error")
        result = RelevanceScorer(client).score(ARTICLE, IDENTITY)
        assert result['relevance_score'] == FALLBACK_SCORE
        assert result['ai_tip'] == FALLBACK_TIP

    def test_invalid_json_falls_back(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _mock_chat_response('not json')
        assert RelevanceScorer(client).score(ARTICLE, IDENTITY)['category'] == FALLBACK_CATEGORY
