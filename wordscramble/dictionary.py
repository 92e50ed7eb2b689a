from __future__ import annotations
import logging
import re
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set, Tuple, Union

from wordfreq import get_frequency_dict

from .exceptions import ResourceMissing, ResourceUnreadable

logger = logging.getLogger(__name__)

RESOURCE_PACKAGE = 'wordscramble.resources'
WORD_POOL_RESOURCE = 'start.txt'
DICTIONARY_RESOURCE = 'dictionary.txt'
DEFAULT_LANGUAGE = 'en'

# Letters with optional inner apostrophes ("don't")
_TOKEN_RE = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)*")

PathLike = Union[str, Path]


def _read_text(path: Optional[PathLike], resource: str, encoding: str) -> Tuple[str, str]:
    """Read a bundled resource, or ``path`` when given. Returns (text, source)."""
    if path is not None:
        target = Path(path)
        source = str(target)
    else:
        source = f"{RESOURCE_PACKAGE}/{resource}"
        try:
            target = resources.files(RESOURCE_PACKAGE).joinpath(resource)
        except ModuleNotFoundError as exc:
            raise ResourceMissing(f"Could not locate {source}") from exc
    if not target.is_file():
        raise ResourceMissing(f"Could not locate {source}")
    try:
        return target.read_bytes().decode(encoding), source
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise ResourceUnreadable(f"Could not read {source} as {encoding} text: {exc}") from exc


def load_word_pool(path: Optional[PathLike] = None, encoding: str = 'ascii') -> List[str]:
    """Load the candidate root words, one per line.

    Lines are trimmed and lowercased and blank lines are skipped, so a file
    that only holds blank lines gives an empty pool. Starting a round from an
    empty pool is the caller's problem (see ``GameSession.start_round``).
    """
    text, source = _read_text(path, WORD_POOL_RESOURCE, encoding)
    pool = [line.strip().lower() for line in text.split('\n')]
    pool = [w for w in pool if w]
    logger.info("Loaded %d root words from %s", len(pool), source)
    return pool


class Dictionary(Protocol):
    def is_real_word(self, word: str, language: str = DEFAULT_LANGUAGE) -> bool:
        ...


class DictionaryService:
    """Word-list backed spell checker for a single language."""

    def __init__(self, words: Optional[Iterable[str]] = None, language: str = DEFAULT_LANGUAGE):
        self.language = language
        # Store lowercase words
        self._words: Set[str] = {w.strip().lower() for w in (words or ()) if w.strip()}

    @classmethod
    def from_word_list(cls, path: Optional[PathLike] = None, language: str = DEFAULT_LANGUAGE,
                       encoding: str = 'utf-8') -> 'DictionaryService':
        text, source = _read_text(path, DICTIONARY_RESOURCE, encoding)
        service = cls(text.splitlines(), language=language)
        logger.info("Loaded %d dictionary words (%s) from %s", len(service), language, source)
        return service

    @classmethod
    def from_wordfreq(cls, language: str = DEFAULT_LANGUAGE,
                      min_frequency: float = 1e-7) -> 'DictionaryService':
        """Build the word set from wordfreq's frequency list for ``language``."""
        frequency_dict = get_frequency_dict(language)
        words = [w for w, freq in frequency_dict.items() if freq >= min_frequency and w.replace("'", '').isalpha()]
        service = cls(words, language=language)
        logger.info("Loaded %d dictionary words (%s) from wordfreq", len(service), language)
        return service

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def misspelled_range(self, word: str) -> Optional[Tuple[int, int]]:
        """Return ``(start, length)`` of the first unknown token, or None."""
        for match in _TOKEN_RE.finditer(word):
            if match.group(0).lower() not in self._words:
                return match.start(), match.end() - match.start()
        return None

    def is_real_word(self, word: str, language: str = DEFAULT_LANGUAGE) -> bool:
        if language != self.language:
            logger.warning("No %r dictionary loaded (have %r)", language, self.language)
            return False
        return self.misspelled_range(word) is None

    def definition(self, word: str) -> Optional[str]:
        # Placeholder; a real implementation would query a dictionary API
        w = word.strip().lower()
        if w and w in self._words:
            return f"Demo definition for {w.upper()}."
        return None
