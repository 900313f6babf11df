"""
Handlers Module for Find The Imposter.

Contains all web layer handlers (Socket.IO and API) with no game logic.
Handlers coordinate between the web layer and the game/lobby managers.
"""

from .socket_handlers import register_socket_handlers
from .api_handlers import register_api_handlers

__all__ = [
    'register_socket_handlers',
    'register_api_handlers'
]
