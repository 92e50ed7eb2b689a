import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..exceptions import GameError

logger = logging.getLogger(__name__)

router = APIRouter()

# WebSocket sessions live in their own id space, apart from REST ids and Socket.IO sids
SESSION_PREFIX = 'ws:'


def _games():
    # Imported late to avoid a cycle with main, which mounts this router
    from ..main import games
    return games


def _error(code: str, message: str) -> dict:
    return {"type": "error", "error": code, "message": message}


@router.websocket("/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    await websocket.accept()
    games = _games()
    key = SESSION_PREFIX + session_id

    # One socket per session; a second socket on the same id is refused
    try:
        state = await games.create_session(key)
    except GameError as exc:
        await websocket.send_json(_error(exc.code, str(exc)))
        await websocket.close()
        return

    # Send initial state to player
    await websocket.send_json({"type": "init", "state": state.model_dump(mode='json')})

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except ValueError:
                await websocket.send_json(_error("invalid_json", "Messages must be JSON objects"))
                continue
            if not isinstance(data, dict):
                data = {}
            try:
                if data.get("type") == "start":
                    state = await games.start_round(key)
                    await websocket.send_json({"type": "init", "state": state.model_dump(mode='json')})
                elif data.get("type") == "submit":
                    result = await games.submit_word(key, str(data.get("word") or ""))
                    await websocket.send_json({
                        "type": "update",
                        "result": result.model_dump(mode='json') if result else None,
                        "state": games.state(key).model_dump(mode='json'),
                    })
                else:
                    await websocket.send_json(
                        _error("unknown_message", f"Unknown message type: {data.get('type')!r}"))
            except GameError as exc:
                await websocket.send_json(_error(exc.code, str(exc)))
    except WebSocketDisconnect:
        logger.debug("WebSocket for session %s disconnected", session_id)
    finally:
        games.remove_session(key)
