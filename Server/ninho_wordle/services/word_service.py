"""
Word Service

External collaborators of the game: the online vocabulary lookup, the AI
word definitions and the AI themed-word generator. Identical concurrent
requests share one upstream call and results are cached per key.
"""

import json
import random
import re
import time
from typing import Callable, Dict, List, Optional

import requests

from ..config.game_settings import WORD_LENGTH
from ..models.word import Definition, ThemeWord
from ..utils.errors import ExternalServiceError, ValidationError
from ..utils.game_logger import game_logger
from ..utils.request_cache import InFlightCache

QUOTA_PATTERN = re.compile(r'quota|rate|429', re.IGNORECASE)

DEFINITION_PROMPT = """
Você é um explicador de palavras em português do Brasil, com tom leve, acolhedor e curioso,
pensado para crianças, adolescentes e suas famílias.
Explique de forma simples, sem formalidade excessiva nem jargões.

RETORNE APENAS JSON com as chaves:
- "definicao_curta": 1-2 frases, até ~50 palavras. Não defina usando a própria palavra.
- "exemplos": array com 2 frases curtas e naturais usando a palavra no cotidiano.
- "sinonimos": 3-6 itens comuns (se não houver, retorne []).
- "observacoes": 1 frase opcional com curiosidade, variação regional ou dica rápida.

Regras:
- Escreva em pt-BR, claro e gentil.
- Evite termos sensíveis, ofensivos ou muito técnicos.
- Não ultrapasse ~100 palavras no total da resposta.
"""

THEME_PROMPT = """
Você é um gerador de palavras para um jogo educativo infantil em português do Brasil.
Sua tarefa é gerar EXATAMENTE 15 palavras relacionadas ao tema fornecido.

REGRAS IMPORTANTES:
- Cada palavra deve ter EXATAMENTE 5 letras
- Todas as palavras devem estar em PORTUGUÊS DO BRASIL
- As palavras devem ser apropriadas para crianças e adolescentes
- As palavras devem ser relacionadas ao tema fornecido
- Evite palavras muito complexas ou técnicas
- Retorne APENAS um JSON no formato: {"words": ["palavra1", "palavra2", ...]}
"""


class WordCheckClient:
    """Checks words against the Academia Brasileira de Letras vocabulary search."""

    def __init__(self,
                 lookup_url: str,
                 timeout: float = 15,
                 session: Optional[requests.Session] = None):
        self.lookup_url = lookup_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cache = InFlightCache()

    def check(self, word: str) -> bool:
        """
        Whether the vocabulary knows the word.

        Raises:
            ValidationError: If no word is given
            ExternalServiceError: If the lookup fails
        """
        cleaned = (word or '').strip() if isinstance(word, str) else ''
        if not cleaned:
            raise ValidationError('Palavra não fornecida')
        return self.cache.get_or_load(cleaned, lambda: self._lookup(cleaned))

    def _lookup(self, word: str) -> bool:
        try:
            response = self.session.get(
                self.lookup_url,
                params={'form': 'vocabulario', 'palavra': word},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as http_err:
            status = http_err.response.status_code if http_err.response is not None else 502
            raise ExternalServiceError(
                f"Erro ao verificar palavra: {http_err}", rate_limited=status == 429
            )
        except (requests.exceptions.RequestException, ValueError) as req_err:
            raise ExternalServiceError(f"Erro ao verificar palavra: {req_err}", status_code=503)

        valid = isinstance(data, dict) and bool(data.get('rows'))
        game_logger.logger.info(f"[check-word] {word} -> {'valid' if valid else 'invalid'}")
        return valid


class OpenRouterClient:
    """
    Minimal chat-completions client returning JSON objects.

    Retries 429/503 answers, honouring Retry-After when the upstream sends
    it and backing off exponentially (capped at 8 seconds) otherwise.
    """

    def __init__(self,
                 api_key: Optional[str],
                 base_url: str = 'https://openrouter.ai/api/v1',
                 model: str = 'openai/gpt-4o-mini',
                 max_retries: int = 4,
                 timeout: float = 15,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = session or requests.Session()
        self.sleep = sleep

    def complete_json(self, system_prompt: str, user_prompt: str, temperature: float = 0.3) -> Dict:
        """
        Run a chat completion constrained to a JSON object.

        Returns:
            Dict: Parsed JSON content of the first choice

        Raises:
            ExternalServiceError: If the API key is missing, the upstream fails or answers garbage
        """
        if not self.api_key:
            raise ExternalServiceError('OPENROUTER_API_KEY não configurada', status_code=500, retryable=False)

        payload = {
            'model': self.model,
            'response_format': {'type': 'json_object'},
            'temperature': temperature,
            'messages': [
                {'role': 'system', 'content': system_prompt},
                {'role': 'user', 'content': user_prompt}
            ]
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json'
        }

        attempt = 0
        while True:
            try:
                response = self.session.post(
                    f'{self.base_url}/chat/completions',
                    json=payload,
                    headers=headers,
                    timeout=self.timeout
                )
            except requests.exceptions.RequestException as req_err:
                raise ExternalServiceError(f'Falha ao contactar o serviço de IA: {req_err}', status_code=503)

            if response.status_code in (429, 503):
                if attempt >= self.max_retries:
                    raise ExternalServiceError(
                        self._error_message(response),
                        status_code=503,
                        rate_limited=response.status_code == 429
                    )
                attempt += 1
                delay = self._backoff(response, attempt)
                game_logger.logger.warning(
                    f"AI upstream answered {response.status_code}; retry {attempt}/{self.max_retries} in {delay}s"
                )
                self.sleep(delay)
                continue

            if not response.ok:
                message = self._error_message(response)
                raise ExternalServiceError(message, rate_limited=bool(QUOTA_PATTERN.search(message)))

            break

        try:
            content = response.json()['choices'][0]['message']['content'] or '{}'
            data = json.loads(content)
        except (ValueError, KeyError, IndexError, TypeError):
            raise ExternalServiceError('Formato de resposta inválido da IA')

        if not isinstance(data, dict):
            raise ExternalServiceError('Formato de resposta inválido da IA')
        return data

    def _backoff(self, response: requests.Response, attempt: int) -> float:
        try:
            retry_after = float(response.headers.get('Retry-After', 0))
        except (TypeError, ValueError):
            retry_after = 0
        if retry_after > 0:
            return retry_after
        return min(2 ** attempt, 8)

    def _error_message(self, response: requests.Response) -> str:
        try:
            error = response.json().get('error')
        except (ValueError, AttributeError):
            error = None
        if isinstance(error, dict):
            error = error.get('message')
        return str(error or f'Serviço de IA respondeu {response.status_code}')


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


class DefinitionService:
    """Short child-friendly definitions, cached per word."""

    def __init__(self, client: OpenRouterClient):
        self.client = client
        self.cache = InFlightCache()

    def get_definition(self, word: str) -> Definition:
        raw = word.strip() if isinstance(word, str) else ''
        if len(raw) != WORD_LENGTH or not raw.isalpha():
            raise ValidationError('Palavra inválida (5 letras)')
        return self.cache.get_or_load(raw, lambda: self._define(raw))

    def _define(self, word: str) -> Definition:
        data = self.client.complete_json(DEFINITION_PROMPT, f'Palavra: {word}', temperature=0.3)
        observacoes = data.get('observacoes')
        return Definition(
            word=word,
            definicao_curta=str(data.get('definicao_curta') or ''),
            exemplos=_string_list(data.get('exemplos')),
            sinonimos=_string_list(data.get('sinonimos')),
            observacoes=str(observacoes) if observacoes else None
        )


class ThemeWordService:
    """Picks a 5-letter word from an AI-generated list for a theme."""

    def __init__(self, client: OpenRouterClient, rng: Optional[random.Random] = None):
        self.client = client
        self.rng = rng or random.Random()
        self.cache = InFlightCache()

    def generate(self, theme: str) -> ThemeWord:
        if not isinstance(theme, str) or not theme.strip():
            raise ValidationError('Tema é obrigatório')
        return self.cache.get_or_load(theme.lower().strip(), lambda: self._generate(theme.strip()))

    def _generate(self, theme: str) -> ThemeWord:
        data = self.client.complete_json(
            THEME_PROMPT,
            f'Tema: {theme}\n\nGere 15 palavras de 5 letras relacionadas a este tema.',
            temperature=0.7
        )

        words = data.get('words')
        if not isinstance(words, list) or not words:
            raise ExternalServiceError('Formato de resposta inválido da IA')

        valid_words = [
            word.lower().strip() for word in words
            if isinstance(word, str) and len(word.strip()) == WORD_LENGTH
        ]
        if not valid_words:
            raise ExternalServiceError('Nenhuma palavra válida gerada')

        selected = self.rng.choice(valid_words)
        game_logger.logger.info(f"[generate-word] theme '{theme}' -> {selected.upper()} out of {valid_words}")
        return ThemeWord(word=selected.upper(), allWords=valid_words, theme=theme)


class WordService:
    """Bundle of the external word collaborators owned by the application."""

    def __init__(self,
                 checker: WordCheckClient,
                 definitions: DefinitionService,
                 themes: ThemeWordService):
        self.checker = checker
        self.definitions = definitions
        self.themes = themes

    @classmethod
    def from_config(cls, config_class) -> "WordService":
        """Build the services from a Config class."""
        session = requests.Session()
        client = OpenRouterClient(
            api_key=config_class.OPENROUTER_API_KEY,
            base_url=config_class.OPENROUTER_BASE_URL,
            model=config_class.LLM_MODEL,
            max_retries=config_class.LLM_MAX_RETRIES,
            timeout=config_class.HTTP_TIMEOUT_SECONDS,
            session=session
        )
        checker = WordCheckClient(
            config_class.ABL_LOOKUP_URL,
            timeout=config_class.HTTP_TIMEOUT_SECONDS,
            session=session
        )
        return cls(checker, DefinitionService(client), ThemeWordService(client))
