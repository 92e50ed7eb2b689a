import random
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordscramble.dictionary import DictionaryService  # noqa: E402
from wordscramble.game_logic import GameSession  # noqa: E402


class CountingDictionary(DictionaryService):
    """Dictionary over a fixed word set that records every lookup."""

    def __init__(self, words):
        super().__init__(words)
        self.lookups = []

    def is_real_word(self, word, language='en'):
        self.lookups.append(word)
        return super().is_real_word(word, language)


REAL_WORDS = ['silent', 'sit', 'tin', 'net', 'lint', 'inlet', 'lens', 'aab', 'abb', 'ab', 'ba']


@pytest.fixture()
def dictionary():
    return CountingDictionary(REAL_WORDS)


@pytest.fixture()
def session(dictionary):
    game = GameSession(dictionary, rng=random.Random(1234))
    game.start_round(['listen'])
    return game
