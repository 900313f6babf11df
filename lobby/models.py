"""
Data models for room membership.

These are pure data structures used to pass information between
the roster, the game systems, and handlers.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from datetime import datetime, timezone


@dataclass
class PlayerData:
    """Represents a participant in a room."""
    id: str
    name: str
    connection_id: Optional[str] = None
    is_alive: bool = True
    is_imposter: bool = False
    word: Optional[str] = None
    has_voted: bool = False
    is_connected: bool = True
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def clear_round_state(self) -> None:
        """Forget the secret role, word and vote for the round."""
        self.is_imposter = False
        self.word = None
        self.has_voted = False

    def eliminate(self) -> None:
        """Mark player as eliminated."""
        self.is_alive = False

    def to_summary(self) -> Dict[str, Any]:
        """Just enough to identify the player on screen."""
        return {'id': self.id, 'name': self.name}

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            include_secret: Whether to include the secret role and word
        """
        data = {
            'id': self.id,
            'name': self.name,
            'is_alive': self.is_alive,
            'is_connected': self.is_connected,
            'has_voted': self.has_voted,
        }

        if include_secret:
            data.update({
                'is_imposter': self.is_imposter,
                'word': self.word
            })

        return data
