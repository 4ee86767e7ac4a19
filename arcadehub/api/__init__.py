"""
API Module - HTTP interface for presentation layers.

Exposes the engines via REST so a browser (or any client) can:
1. Browse the catalog and high scores
2. Start a game session
3. Send input events, commands and timer ticks
4. Read the current state back after every step

Game state is session-scoped. Only final scores are persisted.
"""

from .service import APIService
from .app import create_app

__all__ = [
    "APIService",
    "create_app",
]
