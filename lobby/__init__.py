"""
Lobby Module for Find The Imposter.

Contains room membership and connection tracking.
The room registry lives in ``lobby.manager`` and is imported from there
directly, since it depends on the game models.
"""

from .models import PlayerData
from .player_manager import PlayerManager
from .connection_manager import ConnectionManager, ClientSession
from .lobby_creator import LobbyCreator

__all__ = [
    # Data models
    'PlayerData',
    'ClientSession',

    # Managers
    'PlayerManager',
    'ConnectionManager',
    'LobbyCreator'
]
