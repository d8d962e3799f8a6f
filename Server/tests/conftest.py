import os
import tempfile
from datetime import datetime
from unittest.mock import Mock

# Keep test logs out of the working tree; must run before the package is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='ninho_wordle_logs_'))

import pytest

from ninho_wordle import create_app
from ninho_wordle.config import TestingConfig
from ninho_wordle.models.word import Definition
from ninho_wordle.services.dictionary_service import WordDictionary
from ninho_wordle.services.game_service import GameService, GameSession
from ninho_wordle.services.storage import MemoryStorage
from ninho_wordle.services.word_service import WordService

ALLOWED = ['CARRO', 'TESLA', 'AUDIO', 'PALCO', 'SETAS', 'ZEBRA', 'AMIGO', 'CASAS']


class FakeClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now=None):
        self.now = now or datetime(2025, 3, 10, 11, 0, 0)

    def __call__(self):
        return self.now


def type_word(session, word):
    for letter in word:
        session.enter_letter(letter)


@pytest.fixture
def dictionary():
    return WordDictionary(['TESTE'], ALLOWED)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def session(dictionary, storage, clock):
    """Session past onboarding, playing against TESTE."""
    game = GameSession(dictionary, storage, clock=clock)
    game.initialize_session()
    game.reset_session(False)
    return game


@pytest.fixture
def word_service():
    return WordService(checker=Mock(), definitions=Mock(), themes=Mock())


@pytest.fixture
def game_service(dictionary, clock):
    return GameService(dictionary=dictionary, clock=clock)


@pytest.fixture
def app(game_service, word_service):
    app = create_app(TestingConfig, game_service=game_service, word_service=word_service)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_definition():
    return Definition(
        word='casas',
        definicao_curta='Lugares onde as pessoas moram.',
        exemplos=['As casas da rua são coloridas.', 'Visitei as casas dos meus avós.'],
        sinonimos=['lares', 'moradias'],
        observacoes='Em Portugal também se diz "vivendas" 🙂'
    )
