import os


def _optional_int(name: str):
    value = os.environ.get(name)
    return int(value) if value not in (None, '') else None


class Config:
    # Word pool; unset means the bundled resources/start.txt
    WORD_POOL_PATH = os.environ.get('WORD_POOL_PATH') or None
    WORD_POOL_ENCODING = os.environ.get('WORD_POOL_ENCODING', 'ascii')
    # Real-word source: 'wordfreq' (English frequency lists) or 'bundled' (resources/dictionary.txt).
    # DICTIONARY_PATH points at a word list file and wins over both.
    DICTIONARY_SOURCE = os.environ.get('DICTIONARY_SOURCE', 'wordfreq')
    DICTIONARY_PATH = os.environ.get('DICTIONARY_PATH') or None
    # Words rarer than this (share of all words) are not counted as real
    DICTIONARY_MIN_FREQUENCY = float(os.environ.get('DICTIONARY_MIN_FREQUENCY', '1e-7'))
    DICTIONARY_LANGUAGE = os.environ.get('DICTIONARY_LANGUAGE', 'en')
    MIN_WORD_LENGTH = int(os.environ.get('MIN_WORD_LENGTH', '3'))
    # Seed for root word selection. Unset uses system randomness.
    RANDOM_SEED = _optional_int('RANDOM_SEED')
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
