import json
import random
from unittest.mock import Mock

import pytest
import requests

from ninho_wordle.config import TestingConfig
from ninho_wordle.models.word import Definition, ThemeWord
from ninho_wordle.services.word_service import (
    DefinitionService, OpenRouterClient, ThemeWordService, WordCheckClient, WordService
)
from ninho_wordle.utils.errors import RETRY_SUGGESTION, ExternalServiceError, ValidationError


class FakeResponse:
    """Just enough of requests.Response for the clients."""

    def __init__(self, status_code=200, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON body')
        return self._payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f'{self.status_code} Error', response=self)


def completion(content):
    return FakeResponse(200, {'choices': [{'message': {'content': json.dumps(content)}}]})


def make_client(*responses, max_retries=4):
    http = Mock()
    http.post.side_effect = list(responses)
    sleep = Mock()
    client = OpenRouterClient('key', max_retries=max_retries, session=http, sleep=sleep)
    return client, http, sleep


class TestWordCheckClient:

    def test_known_word(self):
        http = Mock()
        http.get.return_value = FakeResponse(200, {'rows': [{'palavra': 'casas'}]})
        checker = WordCheckClient('https://abl.test/buscar', session=http)

        assert checker.check(' casas ')
        _, kwargs = http.get.call_args
        assert kwargs['params'] == {'form': 'vocabulario', 'palavra': 'casas'}

    def test_unknown_word(self):
        http = Mock()
        http.get.return_value = FakeResponse(200, {'rows': []})
        checker = WordCheckClient('https://abl.test/buscar', session=http)

        assert not checker.check('zzzzz')

    def test_results_are_cached(self):
        http = Mock()
        http.get.return_value = FakeResponse(200, {'rows': [1]})
        checker = WordCheckClient('https://abl.test/buscar', session=http)

        checker.check('casas')
        checker.check('casas')

        assert http.get.call_count == 1

    @pytest.mark.parametrize('word', ['', '   ', None])
    def test_word_required(self, word):
        checker = WordCheckClient('https://abl.test/buscar', session=Mock())

        with pytest.raises(ValidationError):
            checker.check(word)

    def test_connection_error(self):
        http = Mock()
        http.get.side_effect = requests.exceptions.ConnectionError('offline')
        checker = WordCheckClient('https://abl.test/buscar', session=http)

        with pytest.raises(ExternalServiceError) as exc_info:
            checker.check('casas')

        assert exc_info.value.status_code == 503
        assert exc_info.value.retryable

    def test_rate_limited_lookup(self):
        http = Mock()
        http.get.return_value = FakeResponse(429)
        checker = WordCheckClient('https://abl.test/buscar', session=http)

        with pytest.raises(ExternalServiceError) as exc_info:
            checker.check('casas')

        assert exc_info.value.rate_limited
        assert exc_info.value.status_code == 429


class TestOpenRouterClient:

    def test_parses_json_content(self):
        client, http, _ = make_client(completion({'words': ['gatos']}))

        assert client.complete_json('system', 'user') == {'words': ['gatos']}

        args, kwargs = http.post.call_args
        assert args[0] == 'https://openrouter.ai/api/v1/chat/completions'
        assert kwargs['json']['response_format'] == {'type': 'json_object'}
        assert kwargs['headers']['Authorization'] == 'Bearer key'

    def test_retry_after_header_is_honoured(self):
        client, http, sleep = make_client(
            FakeResponse(429, headers={'Retry-After': '2'}),
            completion({'ok': True})
        )

        assert client.complete_json('s', 'u') == {'ok': True}
        sleep.assert_called_once_with(2.0)
        assert http.post.call_count == 2

    def test_exponential_backoff(self):
        client, _, sleep = make_client(
            FakeResponse(503), FakeResponse(503), FakeResponse(503), FakeResponse(503),
            completion({'ok': True})
        )

        client.complete_json('s', 'u')

        assert [call.args[0] for call in sleep.call_args_list] == [2, 4, 8, 8]

    def test_gives_up_after_max_retries(self):
        client, http, sleep = make_client(FakeResponse(429), FakeResponse(429), max_retries=1)

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        error = exc_info.value
        assert error.rate_limited
        assert error.status_code == 429
        assert error.retryable
        assert error.user_message == RETRY_SUGGESTION
        assert http.post.call_count == 2
        assert sleep.call_count == 1

    def test_unavailable_after_retries(self):
        client, _, _ = make_client(FakeResponse(503), max_retries=0)

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        assert exc_info.value.status_code == 503
        assert not exc_info.value.rate_limited

    def test_quota_error_is_rate_limited(self):
        client, _, _ = make_client(FakeResponse(402, {'error': {'message': 'Insufficient quota'}}))

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        assert exc_info.value.rate_limited
        assert exc_info.value.user_message == RETRY_SUGGESTION

    def test_other_upstream_error(self):
        client, _, _ = make_client(FakeResponse(400, {'error': 'Bad model'}))

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        assert str(exc_info.value) == 'Bad model'
        assert exc_info.value.status_code == 502

    def test_missing_api_key(self):
        http = Mock()
        client = OpenRouterClient(None, session=http)

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        assert exc_info.value.status_code == 500
        assert not exc_info.value.retryable
        http.post.assert_not_called()

    @pytest.mark.parametrize('response', [
        FakeResponse(200, {'choices': []}),
        FakeResponse(200, {'choices': [{'message': {'content': 'não é json'}}]}),
        FakeResponse(200, {'choices': [{'message': {'content': '["lista"]'}}]}),
    ])
    def test_malformed_answer(self, response):
        client, _, _ = make_client(response)

        with pytest.raises(ExternalServiceError) as exc_info:
            client.complete_json('s', 'u')

        assert str(exc_info.value) == 'Formato de resposta inválido da IA'

    def test_empty_content_is_empty_object(self):
        client, _, _ = make_client(FakeResponse(200, {'choices': [{'message': {'content': None}}]}))

        assert client.complete_json('s', 'u') == {}


class TestDefinitionService:

    def test_definition(self):
        client = Mock()
        client.complete_json.return_value = {
            'definicao_curta': 'Lugares onde as pessoas moram.',
            'exemplos': ['As casas são azuis.', ''],
            'sinonimos': ['lares'],
        }
        service = DefinitionService(client)

        definition = service.get_definition(' casas ')

        assert definition == Definition(
            word='casas',
            definicao_curta='Lugares onde as pessoas moram.',
            exemplos=['As casas são azuis.'],
            sinonimos=['lares'],
            observacoes=None
        )

    def test_cached_per_word(self):
        client = Mock()
        client.complete_json.return_value = {'definicao_curta': 'x'}
        service = DefinitionService(client)

        service.get_definition('casas')
        service.get_definition('casas')

        assert client.complete_json.call_count == 1

    @pytest.mark.parametrize('word', ['casa', 'ca5as', '', None, 'casinha'])
    def test_invalid_word(self, word):
        client = Mock()
        service = DefinitionService(client)

        with pytest.raises(ValidationError):
            service.get_definition(word)
        client.complete_json.assert_not_called()

    def test_accented_word_accepted(self):
        client = Mock()
        client.complete_json.return_value = {'definicao_curta': 'fruta cítrica'}

        assert DefinitionService(client).get_definition('limão').word == 'limão'


class TestThemeWordService:

    def test_picks_a_five_letter_word(self):
        client = Mock()
        client.complete_json.return_value = {'words': ['Gatos', 'cão', 'patos', 'elefante', 7]}
        service = ThemeWordService(client, rng=random.Random(3))

        theme_word = service.generate('Animais')

        assert isinstance(theme_word, ThemeWord)
        assert theme_word.allWords == ['gatos', 'patos']
        assert theme_word.word in ('GATOS', 'PATOS')
        assert theme_word.theme == 'Animais'

    def test_cached_per_theme_ignoring_case(self):
        client = Mock()
        client.complete_json.return_value = {'words': ['gatos']}
        service = ThemeWordService(client)

        first = service.generate('Animais')
        second = service.generate('  animais ')

        assert first is second
        assert client.complete_json.call_count == 1

    @pytest.mark.parametrize('theme', ['', '   ', None])
    def test_theme_required(self, theme):
        with pytest.raises(ValidationError):
            ThemeWordService(Mock()).generate(theme)

    @pytest.mark.parametrize('payload, message', [
        ({}, 'Formato de resposta inválido da IA'),
        ({'words': 'gatos'}, 'Formato de resposta inválido da IA'),
        ({'words': ['cão', 'elefante']}, 'Nenhuma palavra válida gerada'),
    ])
    def test_unusable_answers(self, payload, message):
        client = Mock()
        client.complete_json.return_value = payload

        with pytest.raises(ExternalServiceError) as exc_info:
            ThemeWordService(client).generate('Animais')

        assert str(exc_info.value) == message


def test_word_service_from_config():
    service = WordService.from_config(TestingConfig)

    assert service.definitions.client is service.themes.client
    assert service.definitions.client.api_key == 'test-key'
    assert service.definitions.client.max_retries == 0
    assert service.checker.lookup_url == TestingConfig.ABL_LOOKUP_URL
