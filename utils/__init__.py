"""
Utilities module for Find The Imposter.

This module contains constants and helper functions used throughout
the application.
"""

from .constants import REJECTIONS, REJECTION_MESSAGES, WORD_PAIRS, WINNER_TYPES
from .helpers import (
    generate_room_code, normalize_room_code, validate_display_name,
    shuffle_players, reject, rejection_payload
)

__all__ = [
    'REJECTIONS',
    'REJECTION_MESSAGES',
    'WORD_PAIRS',
    'WINNER_TYPES',
    'generate_room_code',
    'normalize_room_code',
    'validate_display_name',
    'shuffle_players',
    'reject',
    'rejection_payload'
]
