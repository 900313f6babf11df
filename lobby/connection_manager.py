"""
Connection Manager for Find The Imposter rooms.

Tracks which room, role and player each socket connection belongs to.
Contains no game logic - purely connection bookkeeping.
"""

import logging
import threading
from typing import Dict, Optional, List
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

ROLES = ('moderator', 'host', 'player')


@dataclass
class ClientSession:
    """Information about one socket connection."""
    socket_id: str
    room_code: str
    role: str
    player_id: Optional[str] = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConnectionManager:
    """
    Maps socket connections to the room and player they represent.

    A socket belongs to at most one room at a time.
    """

    def __init__(self):
        self.sessions: Dict[str, ClientSession] = {}  # socket_id -> ClientSession
        self._lock = threading.Lock()
        logger.debug("Connection manager initialized")

    def register(self, socket_id: str, room_code: str, role: str,
                 player_id: Optional[str] = None) -> ClientSession:
        """
        Associate a socket with a room.

        Args:
            socket_id: Unique socket connection ID
            room_code: Room the socket joined
            role: 'moderator', 'host' or 'player'
            player_id: Player the socket speaks for (players only)

        Returns:
            The stored ClientSession
        """
        if role not in ROLES:
            raise ValueError(f"Unknown connection role: {role}")

        client = ClientSession(
            socket_id=socket_id,
            room_code=room_code,
            role=role,
            player_id=player_id
        )
        with self._lock:
            self.sessions[socket_id] = client

        logger.debug(f"Registered {role} connection {socket_id} in room {room_code}")
        return client

    def unregister(self, socket_id: str) -> Optional[ClientSession]:
        """
        Forget a socket connection.

        Returns:
            The ClientSession that was removed, or None if unknown
        """
        with self._lock:
            client = self.sessions.pop(socket_id, None)

        if client:
            logger.debug(f"Unregistered {client.role} connection {socket_id} from room {client.room_code}")
        return client

    def get(self, socket_id: str) -> Optional[ClientSession]:
        with self._lock:
            return self.sessions.get(socket_id)

    def get_room_connections(self, room_code: str, role: Optional[str] = None) -> List[ClientSession]:
        """All connections in a room, optionally filtered by role."""
        with self._lock:
            return [
                c for c in self.sessions.values()
                if c.room_code == room_code and (role is None or c.role == role)
            ]

    def forget_room(self, room_code: str) -> int:
        """Drop every connection of a removed room. Returns how many were dropped."""
        with self._lock:
            stale = [sid for sid, c in self.sessions.items() if c.room_code == room_code]
            for sid in stale:
                del self.sessions[sid]
        return len(stale)
