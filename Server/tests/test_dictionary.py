import random

import pytest

from ninho_wordle.config import SOLUTIONS, get_word_statistics, validate_word_list_integrity
from ninho_wordle.services.dictionary_service import (
    WordDictionary, build_allowed_words, parse_dictionary_lines, parse_frequency_lines
)


@pytest.fixture(scope='module')
def default_dictionary():
    return WordDictionary.default()


@pytest.mark.parametrize('word', ['AMIGO', 'amigo', 'Amigo', '  AMIGO  ', 'limão', 'LIMAO', 'aguas'])
def test_default_accepts_solutions_in_any_form(default_dictionary, word):
    assert default_dictionary.contains(word)
    assert word in default_dictionary


@pytest.mark.parametrize('word', ['ZZZZZ', 'AMIGOS', 'AMIG', '', '     ', None, 12345])
def test_default_rejects_unknown_or_malformed(default_dictionary, word):
    assert not default_dictionary.contains(word)


def test_allowed_guess_is_not_a_solution(default_dictionary):
    assert default_dictionary.contains('BALAS')
    assert not default_dictionary.is_solution('BALAS')
    assert default_dictionary.is_solution('casas')


def test_offensive_words_are_never_accepted():
    dictionary = WordDictionary(['AMIGO'], ['BESTA', 'BURRO', 'CARRO'])

    assert not dictionary.contains('besta')
    assert not dictionary.contains('BURRO')
    assert dictionary.contains('carro')


def test_random_solution_comes_from_solutions(default_dictionary):
    rng = random.Random(7)
    for _ in range(20):
        assert default_dictionary.random_solution(rng) in default_dictionary.solutions


def test_empty_solutions_rejected():
    with pytest.raises(ValueError):
        WordDictionary([])


def test_packaged_word_lists():
    assert validate_word_list_integrity()

    stats = get_word_statistics()
    assert stats['total_words'] == len(SOLUTIONS)
    assert stats['accepted_guesses'] >= stats['total_words']


def test_build_allowed_words_filters():
    frequency = [
        ('casas', 1),
        ('xanax', 3),
        ('mcfly', 4),
        ('drama', 5),
        ('árvore', 6),
        ('lápis', 7),
        ('Nomes', 8),
        ('mesas', 0),
        ('zebra', 9000),
    ]
    dictionary = ['casas', 'lápis', 'xanax', 'mcfly', 'drama', 'zebra', 'Paris', 'árvore', 'mesas']

    allowed = build_allowed_words(frequency, dictionary, ['AMIGO', 'LIMÃO'])

    assert allowed == ['amigo', 'casas', 'lapis', 'limao']


def test_build_allowed_words_limit():
    allowed = build_allowed_words([('zebra', 9000)], ['zebra'], [], limit=10000)
    assert allowed == ['zebra']


def test_parse_word_sources():
    assert parse_frequency_lines(['casa 1', 'bad', 'x y', 'Lápis 20\n']) == [('casa', 1), ('lápis', 20)]
    assert parse_dictionary_lines(['3', 'casa/AB\n', 'lápis', '  \n']) == ['3', 'casa', 'lápis']

    stems = parse_dictionary_lines(['3', 'casas/AB', 'lápis'])
    assert build_allowed_words([('casas', 1), ('lapis', 2)], stems, []) == ['casas', 'lapis']
