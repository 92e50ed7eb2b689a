from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Dict

import socketio
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import Config
from .exceptions import GameError, SessionNotFound, WordSourceError
from .managers.game import GameManager
from .routers import ws
from .schemas import SessionState, SubmissionResponse, WordSubmission

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*' if Config.CORS_ORIGINS == ['*'] else Config.CORS_ORIGINS,
)

games = GameManager(sio)


@asynccontextmanager
async def lifespan(app):
    """Load the word pool and dictionary; the server cannot run without them."""
    try:
        games.load()
    except WordSourceError:
        logger.exception("Could not load word resources")
        raise
    yield


app = FastAPI(title="WordScramble Server", version="0.1.0", lifespan=lifespan)

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(ws.router, prefix='/ws')


def _http_error(exc: GameError) -> HTTPException:
    status = 404 if isinstance(exc, SessionNotFound) else 409
    return HTTPException(status_code=status, detail={'error': exc.code, 'message': str(exc)})


# REST Endpoints
@app.get('/health')
async def health() -> Dict[str, object]:
    return {'ok': True, 'poolSize': len(games.pool)}


@app.post('/sessions', status_code=201, response_model=SessionState)
async def create_session():
    try:
        return await games.create_session()
    except GameError as exc:
        raise _http_error(exc)


@app.get('/sessions/{session_id}', response_model=SessionState)
async def get_session(session_id: str):
    try:
        return games.state(session_id)
    except GameError as exc:
        raise _http_error(exc)


@app.post('/sessions/{session_id}/round', response_model=SessionState)
async def new_round(session_id: str):
    try:
        return await games.start_round(session_id)
    except GameError as exc:
        raise _http_error(exc)


@app.post('/sessions/{session_id}/words', response_model=SubmissionResponse)
async def submit_word(session_id: str, body: WordSubmission):
    try:
        result = await games.submit_word(session_id, body.word)
        return SubmissionResponse(result=result, state=games.state(session_id))
    except GameError as exc:
        raise _http_error(exc)


@app.delete('/sessions/{session_id}', status_code=204)
async def delete_session(session_id: str):
    games.remove_session(session_id)
    return Response(status_code=204)


# Dictionary validation REST endpoint
@app.get('/dict/validate')
async def validate_word(word: str):
    valid = games.dictionary.is_real_word(word.strip().lower(), Config.DICTIONARY_LANGUAGE)
    definition = games.dictionary.definition(word) if valid else None
    return {'word': word.strip().lower(), 'valid': valid, 'definition': definition}


# Socket.IO Events
async def _emit_error(sid, exc: GameError):
    await sio.emit('game:error', {'error': exc.code, 'message': str(exc)}, to=sid)


@sio.event
async def connect(sid, environ, auth=None):
    try:
        await games.create_session(sid)
    except GameError as exc:
        await _emit_error(sid, exc)


@sio.event
async def disconnect(sid):
    games.remove_session(sid)


@sio.on('round:start')
async def round_start(sid):
    try:
        await games.start_round(sid)
    except GameError as exc:
        await _emit_error(sid, exc)


@sio.on('word:submit')
async def word_submit(sid, payload=None):
    word = payload.get('word', '') if isinstance(payload, dict) else str(payload or '')
    try:
        await games.submit_word(sid, word)
    except GameError as exc:
        await _emit_error(sid, exc)


# Export ASGI app for uvicorn
application = asgi_app

# For local running: uvicorn wordscramble.main:application --reload --host 0.0.0.0 --port 8000
