"""
Data models for game management.

These represent the per-room game session and the results handed back
by the round, vote and elimination steps.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from lobby.models import PlayerData
from utils.constants import DEFAULT_SETTINGS, SETTINGS_ALIASES
from utils.helpers import names_match


class GamePhase(Enum):
    """Game phase enumeration, in the order a round moves through them."""
    LOBBY = "LOBBY"
    WORD_REVEAL = "WORD_REVEAL"
    CLUE_CIRCLE = "CLUE_CIRCLE"
    DISCUSSION = "DISCUSSION"
    VOTING = "VOTING"
    RESULTS = "RESULTS"
    TIE_BREAK = "TIE_BREAK"
    ELIMINATION = "ELIMINATION"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class WordPair:
    """The two secret words for one round."""
    main_word: str
    imposter_word: str
    difficulty: str
    pair_key: str

    def to_dict(self, include_words: bool = True) -> Dict[str, Any]:
        """Convert to dictionary; the display only ever gets the difficulty."""
        data = {'difficulty': self.difficulty}
        if include_words:
            data.update({
                'main_word': self.main_word,
                'imposter_word': self.imposter_word
            })
        return data


@dataclass
class GameSettings:
    """Phase durations in seconds."""
    word_reveal_time: int = DEFAULT_SETTINGS['word_reveal_time']
    clue_time_per_player: int = DEFAULT_SETTINGS['clue_time_per_player']
    discussion_time: int = DEFAULT_SETTINGS['discussion_time']
    voting_time: int = DEFAULT_SETTINGS['voting_time']

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'GameSettings':
        return cls(**{key: values[key] for key in DEFAULT_SETTINGS if key in values})

    @staticmethod
    def parse_updates(updates: Dict[str, Any]) -> Optional[Dict[str, int]]:
        """
        Pick the recognized keys out of a client settings update.

        Unknown keys are dropped. Returns None if any recognized value is
        not a positive whole number.
        """
        parsed = {}
        for raw_key, value in (updates or {}).items():
            key = SETTINGS_ALIASES.get(raw_key, raw_key)
            if key not in DEFAULT_SETTINGS:
                continue

            if isinstance(value, bool):
                return None
            if isinstance(value, str) and value.strip().isdigit():
                value = int(value.strip())
            if not isinstance(value, int) or value <= 0:
                return None

            parsed[key] = value
        return parsed

    def apply(self, values: Dict[str, int]) -> None:
        for key, value in values.items():
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, int]:
        return {
            'word_reveal_time': self.word_reveal_time,
            'clue_time_per_player': self.clue_time_per_player,
            'discussion_time': self.discussion_time,
            'voting_time': self.voting_time
        }


@dataclass
class EliminationRecord:
    """One entry of a room's elimination history."""
    round: int
    id: str
    name: str
    was_imposter: bool
    word: Optional[str]
    kicked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round': self.round,
            'id': self.id,
            'name': self.name,
            'was_imposter': self.was_imposter,
            'word': self.word,
            'kicked': self.kicked
        }


@dataclass
class TallyEntry:
    """Votes received by one alive player."""
    id: str
    name: str
    votes: int
    was_imposter: bool

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        data = {'id': self.id, 'name': self.name, 'votes': self.votes}
        if include_secret:
            data['was_imposter'] = self.was_imposter
        return data


@dataclass
class TallyResult:
    """Outcome of closing the vote."""
    vote_tally: List[TallyEntry] = field(default_factory=list)
    to_eliminate: List[TallyEntry] = field(default_factory=list)
    tie_break_candidates: List[TallyEntry] = field(default_factory=list)
    tie_break_slots: int = 0

    @property
    def needs_tie_break(self) -> bool:
        return len(self.tie_break_candidates) > 0

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        return {
            'vote_tally': [e.to_dict(include_secret) for e in self.vote_tally],
            'to_eliminate': [e.to_dict(include_secret) for e in self.to_eliminate],
            'needs_tie_break': self.needs_tie_break,
            'tie_break_candidates': [e.to_dict(include_secret) for e in self.tie_break_candidates],
            'tie_break_slots': self.tie_break_slots
        }


@dataclass
class RoundSetup:
    """What the room needs to know when a round starts."""
    round: int
    alive_count: int
    imposter_count: int
    difficulty: str
    is_final_round: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'round': self.round,
            'alive_count': self.alive_count,
            'imposter_count': self.imposter_count,
            'difficulty': self.difficulty,
            'is_final_round': self.is_final_round
        }


@dataclass
class GameResult:
    """Represents the final result of a game."""
    winner: str  # 'MAJORITY' or 'IMPOSTER'
    message: str
    survivors: List[Dict[str, str]] = field(default_factory=list)
    imposter: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'winner': self.winner,
            'message': self.message,
            'survivors': self.survivors,
            'imposter': self.imposter
        }


@dataclass
class GameSession:
    """
    All mutable state of one room.

    Only one command may touch a session at a time; the registry hands
    out access while holding ``lock``.
    """
    code: str
    settings: GameSettings = field(default_factory=GameSettings)
    phase: GamePhase = GamePhase.LOBBY
    round_number: int = 0
    imposter_count: int = 0  # dealt at round start, fixed for the round
    players: Dict[str, PlayerData] = field(default_factory=dict)  # id -> player, join order
    word_pair: Optional[WordPair] = None
    votes: Dict[str, str] = field(default_factory=dict)  # voter id -> target id
    used_pairs: List[str] = field(default_factory=list)
    elimination_history: List[EliminationRecord] = field(default_factory=list)
    clue_order: List[str] = field(default_factory=list)
    clue_index: int = 0
    tie_break_candidates: List[TallyEntry] = field(default_factory=list)
    tie_break_slots: int = 0
    tie_break_result: List[TallyEntry] = field(default_factory=list)
    eliminated_this_round: List[TallyEntry] = field(default_factory=list)  # order matters
    last_tally: Optional[TallyResult] = None
    game_result: Optional[GameResult] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lock: Any = field(default_factory=lambda: threading.RLock(), repr=False, compare=False)

    @property
    def is_active(self) -> bool:
        """Check if a round is underway."""
        return self.phase not in (GamePhase.LOBBY, GamePhase.GAME_OVER)

    @property
    def tie_break_pending(self) -> bool:
        return len(self.tie_break_candidates) > 0

    def get_player(self, player_id: Optional[str]) -> Optional[PlayerData]:
        """Find player by id."""
        if player_id is None:
            return None
        return self.players.get(player_id)

    def get_player_by_name(self, name: str) -> Optional[PlayerData]:
        """Find player by display name, ignoring case."""
        for player in self.players.values():
            if names_match(player.name, name or ''):
                return player
        return None

    def get_player_by_connection(self, connection_id: str) -> Optional[PlayerData]:
        """Find player by transport connection id."""
        for player in self.players.values():
            if player.connection_id == connection_id:
                return player
        return None

    def get_all_players(self) -> List[PlayerData]:
        return list(self.players.values())

    def get_alive_players(self) -> List[PlayerData]:
        return [p for p in self.players.values() if p.is_alive]

    @property
    def alive_count(self) -> int:
        return len(self.get_alive_players())

    @property
    def total_count(self) -> int:
        return len(self.players)

    def clear_tie_break(self) -> None:
        self.tie_break_candidates = []
        self.tie_break_slots = 0
        self.tie_break_result = []
