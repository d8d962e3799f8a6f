"""
Allowed Guesses Builder

Rebuilds ninho_wordle/config/allowed.json from a frequency list
("word rank" per line) and a hunspell pt_BR.dic dictionary. Every
solution word is always included.

Usage:
    python build_allowed.py frequency-words.txt pt_BR.dic [--limit 8000]
"""

import argparse
import json
import os

from ninho_wordle.config.game_settings import SOLUTIONS
from ninho_wordle.services.dictionary_service import (
    build_allowed_words, parse_dictionary_lines, parse_frequency_lines
)

DEFAULT_OUTPUT = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'ninho_wordle', 'config', 'allowed.json')


def main():
    parser = argparse.ArgumentParser(description='Build the allowed-guess word list.')
    parser.add_argument('frequency_file', help='Frequency list, one "word rank" pair per line')
    parser.add_argument('dictionary_file', help='Hunspell .dic file')
    parser.add_argument('--limit', type=int, default=8000, help='Highest frequency rank considered')
    parser.add_argument('--output', default=DEFAULT_OUTPUT, help='Where to write the JSON list')
    args = parser.parse_args()

    with open(args.frequency_file, 'r', encoding='utf-8') as f:
        frequency_words = parse_frequency_lines(f)

    with open(args.dictionary_file, 'r', encoding='utf-8') as f:
        dictionary_words = parse_dictionary_lines(f)

    allowed = build_allowed_words(frequency_words, dictionary_words, SOLUTIONS, limit=args.limit)

    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump(allowed, f, ensure_ascii=False, indent=2)
        f.write('\n')

    print(f"allowed words: {len(allowed)}")


if __name__ == '__main__':
    main()
