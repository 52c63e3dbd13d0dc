"""
Shardbound API Server

FastAPI backend with Socket.IO for real-time game updates.
"""

from .main import app, sio
from .session import GameSession, SessionManager

__all__ = ['app', 'sio', 'GameSession', 'SessionManager']
