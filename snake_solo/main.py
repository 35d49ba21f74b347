"""FastAPI application — HTTP routes, WebSocket endpoint, frame loop."""

import asyncio
import contextlib
import json
import logging
import os

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse

from .constants import DATA_FILE, FRAME_RATE, HOST, PORT
from .models import GameStatus, Settings
from .session import GameSession
from .snapshot import build_game_over_msg, build_state_msg, build_welcome_msg
from .storage import JsonFileStore, Storage

logger = logging.getLogger(__name__)

app = FastAPI()
app.state.storage = Storage(JsonFileStore(DATA_FILE))

HTML_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "index.html")


@app.get("/")
async def serve_index():
    return FileResponse(HTML_PATH, media_type="text/html")


@app.get("/api/settings")
async def get_settings():
    return app.state.storage.get_settings().to_dict()


@app.get("/api/best")
async def get_best():
    return {"best": app.state.storage.get_best_score()}


async def send_state(ws: WebSocket, session: GameSession):
    await ws.send_text(build_state_msg(session.state, session.clock()))


async def frame_loop(ws: WebSocket, session: GameSession):
    """Per-connection host scheduler: all ticks for a frame, then one send."""
    try:
        while True:
            if session.status == GameStatus.PLAYING:
                session.frame()
                await send_state(ws, session)
                if session.status == GameStatus.GAME_OVER:
                    await ws.send_text(build_game_over_msg(session.state))
            await asyncio.sleep(1 / FRAME_RATE)
    except (WebSocketDisconnect, RuntimeError) as e:
        # send after the socket closed; the receive side ends the session
        logger.debug("Frame loop stopped: %r", e)


async def handle_message(ws: WebSocket, session: GameSession, msg: dict):
    kind = msg.get("type")
    if kind == "input":
        session.handle_direction(msg.get("direction"))
        return
    if kind == "start":
        session.start()
    elif kind == "restart":
        session.restart()
    elif kind == "pause":
        if not session.pause():
            return
    elif kind == "resume":
        if not session.resume():
            return
    elif kind == "menu":
        session.show_menu()
    elif kind == "settings":
        session.save_settings(Settings.from_dict(msg))
        await ws.send_text(build_welcome_msg(session.state))
    else:
        return
    await send_state(ws, session)


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    session = GameSession(app.state.storage)
    await ws.send_text(build_welcome_msg(session.state))
    await send_state(ws, session)
    ticker = asyncio.create_task(frame_loop(ws, session))
    logger.info("Player connected")
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if isinstance(msg, dict):
                await handle_message(ws, session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected")
    finally:
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    logger.info("Snake server starting on http://localhost:%d", PORT)
    uvicorn.run(app, host=HOST, port=PORT)
