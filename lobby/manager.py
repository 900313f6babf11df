"""
Main lobby management system.

Owns the registry of live rooms (room code -> game session) and
serializes access to each room so only one command mutates it at a time.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Optional, List, Dict, Tuple, Any, Iterator

from .lobby_creator import LobbyCreator
from game.models import GameSession, GameSettings
from utils.constants import REJECTIONS
from utils.helpers import normalize_room_code, reject

logger = logging.getLogger(__name__)


class LobbyManager:
    """Registry of live rooms with per-room locking."""

    def __init__(self, lobby_creator: Optional[LobbyCreator] = None,
                 default_settings: Optional[Dict[str, int]] = None):
        self.lobby_creator = lobby_creator or LobbyCreator()
        self.default_settings = dict(default_settings or {})
        self.active_lobbies: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_lobby(self) -> Tuple[bool, str, Optional[GameSession]]:
        """
        Create a new room with a fresh code.

        Returns:
            tuple: (success, message, session)
        """
        with self._lock:
            code = self.lobby_creator.generate_room_code(lambda c: c in self.active_lobbies)
            if code is None:
                return reject(REJECTIONS['ROOM_CODES_EXHAUSTED'])

            session = GameSession(
                code=code,
                settings=GameSettings.from_dict(self.default_settings)
            )
            self.active_lobbies[code] = session

        logger.info(f"Created room: {code}")
        return True, "Room created successfully", session

    def get_lobby(self, room_code: Optional[str]) -> Optional[GameSession]:
        """
        Get a room by code.

        Args:
            room_code: Code as typed by the client (case and whitespace ignored)

        Returns:
            The game session or None if not found
        """
        is_valid, code = self.lobby_creator.validate_room_code(room_code)
        if not is_valid:
            return None

        with self._lock:
            return self.active_lobbies.get(code)

    def remove_lobby(self, room_code: str) -> bool:
        """
        Destroy a room.

        Returns:
            True if a room was removed
        """
        with self._lock:
            session = self.active_lobbies.pop(normalize_room_code(room_code), None)

        if session:
            logger.info(f"Removed room: {session.code}")
        return session is not None

    def get_active_lobbies(self) -> List[Dict[str, Any]]:
        """Lightweight info about every live room."""
        with self._lock:
            sessions = list(self.active_lobbies.values())

        return [
            {
                'code': s.code,
                'phase': s.phase.value,
                'round': s.round_number,
                'player_count': s.total_count,
                'created_at': s.created_at.isoformat()
            }
            for s in sessions
        ]


    @contextmanager
    def locked_session(self, room_code: Optional[str]) -> Iterator[Optional[GameSession]]:
        """
        Hold a room's lock for the duration of the block.

        Game commands and the state projections built from them run inside
        this block, so commands on one room never interleave.
        Yields None when the room does not exist.
        """
        session = self.get_lobby(room_code)
        if session is None:
            yield None
            return

        with session.lock:
            yield session
