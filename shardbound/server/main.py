"""
Shardbound API Server

FastAPI application with Socket.IO for real-time game updates.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
import socketio

from shardbound.config import get_config

from .routes import match_router, cards_router
from .session import session_manager
from .models import PlayerActionRequest

logger = logging.getLogger(__name__)

config = get_config()


# =============================================================================
# Socket.IO Setup
# =============================================================================

sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins=config.cors_origins,
    logger=False,
    engineio_logger=False
)


@sio.event
async def connect(sid, environ):
    """Handle client connection."""
    logger.info("Client connected: %s", sid)
    await sio.emit('connected', {'sid': sid}, to=sid)


@sio.event
async def disconnect(sid):
    """Handle client disconnection."""
    logger.info("Client disconnected: %s", sid)

    result = session_manager.get_session_by_socket(sid)
    if result:
        session, player_id = result
        session.disconnect_socket(sid)
        await sio.emit('player_disconnected', {
            'player_id': player_id
        }, room=f"match_{session.id}")


@sio.event
async def join_match(sid, data):
    """
    Join a match room.

    Expected data: { match_id: string, player_id: string }
    """
    match_id = data.get('match_id')
    player_id = data.get('player_id')

    if not match_id or not player_id:
        await sio.emit('error', {
            'message': 'match_id and player_id required'
        }, to=sid)
        return

    session = session_manager.get_session(match_id)
    if not session:
        await sio.emit('error', {
            'message': 'Match not found'
        }, to=sid)
        return

    session.connect_socket(player_id, sid)
    await sio.enter_room(sid, f"match_{match_id}")

    await sio.emit('game_state', session.get_client_state().model_dump(), to=sid)
    await sio.emit('player_joined', {
        'player_id': player_id,
        'match_id': match_id
    }, room=f"match_{match_id}")


@sio.event
async def leave_match(sid, data):
    """
    Leave a match room.

    Expected data: { match_id: string }
    """
    match_id = data.get('match_id')
    if match_id:
        await sio.leave_room(sid, f"match_{match_id}")

        session = session_manager.get_session(match_id)
        if session:
            player_id = session.disconnect_socket(sid)
            if player_id:
                await sio.emit('player_left', {
                    'player_id': player_id
                }, room=f"match_{match_id}")


@sio.event
async def player_action(sid, data):
    """
    Handle a player action via WebSocket.

    Expected data: PlayerActionRequest fields plus match_id
    """
    match_id = data.get('match_id')
    if not match_id:
        await sio.emit('error', {'message': 'match_id required'}, to=sid)
        return

    session = session_manager.get_session(match_id)
    if not session:
        await sio.emit('error', {'message': 'Match not found'}, to=sid)
        return

    try:
        action = PlayerActionRequest.model_validate(
            {k: v for k, v in data.items() if k != 'match_id'}
        )
    except ValidationError as e:
        await sio.emit('action_error', {'success': False, 'message': str(e)}, to=sid)
        return

    success, message, _ = await session.handle_action(action)

    if success:
        await sio.emit(
            'game_state', session.get_client_state().model_dump(), room=f"match_{match_id}"
        )
    else:
        await sio.emit('action_error', {
            'success': False,
            'message': message
        }, to=sid)


# =============================================================================
# FastAPI Application
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Shardbound API Server starting...")
    yield
    logger.info("Shardbound API Server shutting down...")


app = FastAPI(
    title="Shardbound API",
    description="Shardbound match server with real-time updates",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(match_router, prefix="/api")
app.include_router(cards_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "shardbound-api"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Shardbound API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health"
    }


# Mount Socket.IO
socket_app = socketio.ASGIApp(sio, app)


def create_app():
    """Create the ASGI application."""
    return socket_app


def run() -> None:
    """Console entry point: run the server with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "shardbound.server.main:socket_app",
        host=config.host,
        port=config.port,
        reload=config.reload
    )


if __name__ == "__main__":
    run()
