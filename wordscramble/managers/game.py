from __future__ import annotations
import asyncio
import logging
import random
import uuid
from typing import Dict, List, Optional

from ..config import Config
from ..dictionary import Dictionary, DictionaryService, load_word_pool
from ..exceptions import SessionInUse, SessionNotFound
from ..game_logic import GameSession
from ..schemas import Accepted, SessionState, SubmissionResult

logger = logging.getLogger(__name__)


class GameManager:
    def __init__(self, sio=None, config=Config):
        self.sio = sio
        self.config = config
        self.pool: List[str] = []
        self.dictionary: Optional[Dictionary] = None
        self.rng = random.Random(config.RANDOM_SEED)
        self.sessions: Dict[str, GameSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def load(self):
        """Load the word pool and dictionary. Failures here are fatal to startup."""
        self.pool = load_word_pool(self.config.WORD_POOL_PATH, encoding=self.config.WORD_POOL_ENCODING)
        language = self.config.DICTIONARY_LANGUAGE
        if self.config.DICTIONARY_PATH or self.config.DICTIONARY_SOURCE == 'bundled':
            self.dictionary = DictionaryService.from_word_list(self.config.DICTIONARY_PATH, language=language)
        else:
            self.dictionary = DictionaryService.from_wordfreq(
                language, min_frequency=self.config.DICTIONARY_MIN_FREQUENCY)

    def get(self, session_id: str) -> GameSession:
        try:
            return self.sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None

    def state(self, session_id: str) -> SessionState:
        return self.get(session_id).to_state(session_id)

    def _lock(self, session_id: str) -> asyncio.Lock:
        if session_id not in self._locks:
            self._locks[session_id] = asyncio.Lock()
        return self._locks[session_id]

    async def create_session(self, session_id: Optional[str] = None) -> SessionState:
        """Create a session and start its first round.

        The session is only kept when the first round could be started.
        Ids already held by another session are refused.
        """
        session_id = session_id or uuid.uuid4().hex
        if session_id in self.sessions:
            raise SessionInUse(f"Session {session_id} is already in use")
        session = GameSession(
            self.dictionary,
            rng=self.rng,
            language=self.config.DICTIONARY_LANGUAGE,
            min_word_length=self.config.MIN_WORD_LENGTH,
        )
        session.start_round(self.pool)
        self.sessions[session_id] = session
        logger.info("Session %s started with root word %r", session_id, session.root_word)
        state = session.to_state(session_id)
        await self._emit('game:state', state, session_id)
        return state

    async def start_round(self, session_id: str) -> SessionState:
        session = self.get(session_id)
        async with self._lock(session_id):
            session.start_round(self.pool)
        logger.info("Session %s new round with root word %r", session_id, session.root_word)
        state = session.to_state(session_id)
        await self._emit('game:state', state, session_id)
        return state

    async def submit_word(self, session_id: str, raw: str) -> Optional[SubmissionResult]:
        session = self.get(session_id)
        async with self._lock(session_id):
            result = session.submit_word(raw)
        if result is None:
            return None
        if isinstance(result, Accepted):
            await self._emit('word:accepted', result, session_id)
            await self._emit('game:state', session.to_state(session_id), session_id)
        else:
            await self._emit('word:rejected', result, session_id)
        return result

    def remove_session(self, session_id: str):
        self.sessions.pop(session_id, None)
        self._locks.pop(session_id, None)

    async def _emit(self, event: str, model, session_id: str):
        # REST session ids are not socket rooms, so those emits reach nobody
        if self.sio is None:
            return
        await self.sio.emit(event, model.model_dump(mode='json', by_alias=True), to=session_id)
