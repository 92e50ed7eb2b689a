import asyncio
import random

import pytest

from wordscramble.exceptions import EmptyPool, SessionInUse, SessionNotFound
from wordscramble.managers.game import GameManager


class RecordingSio:
    def __init__(self):
        self.emitted = []

    async def emit(self, event, data=None, to=None, **kwargs):
        self.emitted.append((event, data, to))


@pytest.fixture()
def manager(dictionary):
    sio = RecordingSio()
    games = GameManager(sio)
    games.pool = ['listen']
    games.dictionary = dictionary
    games.rng = random.Random(0)
    return games


def test_create_session_starts_round(manager):
    state = asyncio.run(manager.create_session('sid-1'))
    assert state.id == 'sid-1'
    assert state.rootWord == 'listen'
    assert state.status == 'in_round'
    assert manager.sio.emitted[-1][0] == 'game:state'
    assert manager.sio.emitted[-1][2] == 'sid-1'


def test_submit_emits_accepted_and_state(manager):
    async def play():
        await manager.create_session('sid-1')
        return await manager.submit_word('sid-1', 'Silent')

    result = asyncio.run(play())
    assert result.word == 'silent'
    events = [e for e, _, _ in manager.sio.emitted]
    assert events[-2:] == ['word:accepted', 'game:state']
    assert manager.sio.emitted[-1][1]['score'] == 6


def test_submit_emits_rejected(manager):
    async def play():
        await manager.create_session('sid-1')
        return await manager.submit_word('sid-1', 'tilt')

    result = asyncio.run(play())
    event, data, _ = manager.sio.emitted[-1]
    assert event == 'word:rejected'
    assert data['reason'] == 'not_possible'
    assert data['title'] == result.title


def test_blank_submit_emits_nothing(manager):
    async def play():
        await manager.create_session('sid-1')
        count = len(manager.sio.emitted)
        result = await manager.submit_word('sid-1', '  ')
        return result, count

    result, count = asyncio.run(play())
    assert result is None
    assert len(manager.sio.emitted) == count


def test_sessions_are_independent(manager):
    async def play():
        await manager.create_session('a')
        await manager.create_session('b')
        await manager.submit_word('a', 'silent')

    asyncio.run(play())
    assert manager.state('a').score == 6
    assert manager.state('b').score == 0


def test_new_round_resets(manager):
    async def play():
        await manager.create_session('a')
        await manager.submit_word('a', 'silent')
        return await manager.start_round('a')

    state = asyncio.run(play())
    assert state.score == 0
    assert state.usedWords == []


def test_empty_pool_does_not_create_session(manager):
    manager.pool = []
    with pytest.raises(EmptyPool):
        asyncio.run(manager.create_session('a'))
    assert 'a' not in manager.sessions


def test_unknown_session(manager):
    with pytest.raises(SessionNotFound):
        manager.state('missing')
    with pytest.raises(SessionNotFound):
        asyncio.run(manager.submit_word('missing', 'silent'))


def test_remove_session(manager):
    asyncio.run(manager.create_session('a'))
    manager.remove_session('a')
    manager.remove_session('a')
    assert 'a' not in manager.sessions


def test_load_missing_pool_is_fatal(tmp_path):
    class BrokenConfig:
        WORD_POOL_PATH = str(tmp_path / 'missing.txt')
        WORD_POOL_ENCODING = 'ascii'
        DICTIONARY_SOURCE = 'bundled'
        DICTIONARY_PATH = None
        DICTIONARY_LANGUAGE = 'en'
        RANDOM_SEED = None
        MIN_WORD_LENGTH = 3

    from wordscramble.exceptions import ResourceMissing
    with pytest.raises(ResourceMissing):
        GameManager(config=BrokenConfig).load()


def test_session_id_in_use(manager):
    async def play():
        await manager.create_session('a')
        await manager.submit_word('a', 'silent')
        await manager.create_session('a')

    with pytest.raises(SessionInUse):
        asyncio.run(play())
    assert manager.state('a').score == 6
