"""
Helper utilities for Find The Imposter.

This module contains utility functions used throughout the application
for validation, generation, and data manipulation.
"""

import random
import re
from typing import List, Optional, Tuple, Any
from .constants import (
    ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, MAX_NAME_LENGTH, REJECTION_MESSAGES
)

_NAME_PATTERN = re.compile(r"^[\w\s\-\.']+$")


def generate_room_code(rng: Optional[random.Random] = None) -> str:
    """
    Generate a random room code.

    Uniqueness is not checked here; the caller compares against live rooms.

    Args:
        rng: Optional random source (defaults to the module generator)

    Returns:
        A 4-character code drawn from ROOM_CODE_ALPHABET
    """
    source = rng or random
    return ''.join(source.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


def normalize_room_code(code: Optional[str]) -> str:
    """Trim and upper-case a room code typed by a player."""
    return (code or '').strip().upper()


def validate_display_name(name: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a display name for the game.

    Returns:
        tuple: (is_valid, error_message)
    """
    cleaned = (name or '').strip()

    if not cleaned:
        return False, "Name cannot be empty"

    if len(cleaned) > MAX_NAME_LENGTH:
        return False, f"Name must be {MAX_NAME_LENGTH} characters or less"

    if not _NAME_PATTERN.match(cleaned):
        return False, "Name contains invalid characters"

    return True, None


def names_match(first: str, second: str) -> bool:
    """Case-insensitive comparison of two display names."""
    return first.strip().lower() == second.strip().lower()


def shuffle_players(players: List, rng: Optional[random.Random] = None) -> List:
    """
    Shuffle a list of players randomly.

    Args:
        players: List of player objects
        rng: Optional random source

    Returns:
        Shuffled copy of the list
    """
    shuffled = players.copy()
    (rng or random).shuffle(shuffled)
    return shuffled


def reject(reason: str) -> Tuple[bool, str, Any]:
    """Build the (success, message, data) tuple for a rejected command."""
    return False, reason, None


def rejection_payload(reason: str) -> dict:
    """Client-facing error body for a rejection code."""
    return {
        'success': False,
        'code': reason,
        'error': REJECTION_MESSAGES.get(reason, reason),
    }
