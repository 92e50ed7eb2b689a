from __future__ import annotations
import logging
import random
from typing import List, Optional, Sequence

from .dictionary import DEFAULT_LANGUAGE, Dictionary
from .exceptions import EmptyPool, RoundNotStarted
from .schemas import Accepted, Rejected, RejectionReason, SessionState, SubmissionResult

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3


def normalize(raw: str) -> str:
    return raw.lower().strip()


def is_possible(word: str, root_word: str) -> bool:
    """True if ``word`` can be spelled from the letters of ``root_word``.

    Each letter of the root may be used once, so a letter that appears twice
    in the root can appear at most twice in the word.
    """
    letters = list(root_word)
    for letter in word:
        try:
            letters.remove(letter)
        except ValueError:
            return False
    return True


class GameSession:
    """State of one player's game: the root word, used words and score."""

    def __init__(self, dictionary: Dictionary, rng: Optional[random.Random] = None,
                 language: str = DEFAULT_LANGUAGE, min_word_length: int = MIN_WORD_LENGTH):
        self.dictionary = dictionary
        self.rng = rng or random.Random()
        self.language = language
        self.min_word_length = min_word_length
        self.root_word: Optional[str] = None
        self.used_words: List[str] = []
        self.score = 0

    @property
    def status(self) -> str:
        return 'idle' if self.root_word is None else 'in_round'

    def start_round(self, pool: Sequence[str]) -> str:
        candidates = [w for w in (normalize(p) for p in pool) if w]
        if not candidates:
            raise EmptyPool("The word pool has no candidate root words")
        self.root_word = candidates[self.rng.randrange(len(candidates))]
        self.used_words = []
        self.score = 0
        return self.root_word

    def is_original(self, word: str) -> bool:
        return word not in self.used_words

    def _reject(self, word: str, reason: RejectionReason) -> Rejected:
        title, message = {
            RejectionReason.TOO_SHORT: (
                "Word too short", f"Enter words of at least {self.min_word_length} letters"),
            RejectionReason.SAME_AS_ROOT: ("Word identical to root word", "Enter a unique word"),
            RejectionReason.NOT_ORIGINAL: ("Word not original", "Enter a new word"),
            RejectionReason.NOT_POSSIBLE: (
                "Word not possible", f"You can't spell that word from {self.root_word}"),
            RejectionReason.NOT_REAL: ("Word not real", "Enter a real word"),
        }[reason]
        logger.debug("Rejected %r (%s) for root %r", word, reason.value, self.root_word)
        return Rejected(word=word, reason=reason, title=title, message=message)

    def submit_word(self, raw: str) -> Optional[SubmissionResult]:
        """Run a submission through the checks; the first failing one wins.

        Returns None for a blank submission. State only changes when the word
        is accepted.
        """
        if self.root_word is None:
            raise RoundNotStarted("Start a round before submitting words")
        answer = normalize(raw)
        if not answer:
            return None
        if len(answer) < self.min_word_length:
            return self._reject(answer, RejectionReason.TOO_SHORT)
        if answer == self.root_word:
            return self._reject(answer, RejectionReason.SAME_AS_ROOT)
        if not self.is_original(answer):
            return self._reject(answer, RejectionReason.NOT_ORIGINAL)
        if not is_possible(answer, self.root_word):
            return self._reject(answer, RejectionReason.NOT_POSSIBLE)
        # Dictionary lookup last, it is the only non-local check
        if not self.dictionary.is_real_word(answer, self.language):
            return self._reject(answer, RejectionReason.NOT_REAL)

        self.score += len(answer)
        self.used_words.insert(0, answer)
        return Accepted(word=answer, points=len(answer))

    def to_state(self, session_id: str) -> SessionState:
        return SessionState(
            id=session_id,
            status=self.status,  # type: ignore
            rootWord=self.root_word,
            usedWords=list(self.used_words),
            score=self.score,
        )
