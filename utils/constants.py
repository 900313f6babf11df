"""
Game constants for Find The Imposter.

This module contains all constant values used throughout the game,
including the word pair data set, room code alphabet, phase names,
rejection codes and default settings.
"""

# Room codes: no I or O so they can't be confused with 1 and 0
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ"
ROOM_CODE_LENGTH = 4
MAX_CODE_ATTEMPTS = 50

# Word pairs organized by difficulty tier: (main word, imposter word)
WORD_PAIRS = {
    'easy': [
        ("Coffee", "Juice"), ("Dog", "Cat"), ("Guitar", "Drums"),
        ("Beach", "Mountain"), ("Pizza", "Burger"), ("Train", "Airplane"),
        ("Winter", "Summer"), ("Book", "Movie"), ("Sun", "Moon"),
        ("Bicycle", "Skateboard"),
    ],
    'medium': [
        ("Eagle", "Hawk"), ("Piano", "Keyboard"), ("Soccer", "Rugby"),
        ("Cake", "Pie"), ("River", "Stream"), ("Jacket", "Sweater"),
        ("Dolphin", "Porpoise"), ("Couch", "Recliner"), ("Painting", "Drawing"),
        ("Jogging", "Sprinting"),
    ],
    'hard': [
        ("Butter", "Margarine"), ("Alligator", "Crocodile"), ("Violin", "Viola"),
        ("Lemon", "Lime"), ("Tornado", "Hurricane"), ("Sofa", "Loveseat"),
        ("Pancake", "Waffle"), ("Raven", "Crow"), ("Jelly", "Jam"),
        ("Hiking", "Trekking"),
    ],
    'evil': [
        ("Fog", "Mist"), ("Turtle", "Tortoise"), ("Emoji", "Emoticon"),
        ("Biscuit", "Cookie"), ("Noodles", "Pasta"), ("Pillow", "Cushion"),
        ("Cemetery", "Graveyard"), ("Scent", "Fragrance"), ("Clamp", "Clip"),
        ("Broth", "Stock"),
    ],
}

# Last round number (inclusive) of each tier; anything later is 'evil'
DIFFICULTY_TIERS = [
    (3, 'easy'),
    (6, 'medium'),
    (9, 'hard'),
]
FINAL_DIFFICULTY = 'evil'

# Imposter step function: (minimum alive count, imposters), checked top-down
IMPOSTER_STEPS = [
    (26, 4),
    (16, 3),
    (7, 2),
]
DECISIVE_ROUND_MAX_ALIVE = 3
GAME_OVER_MAX_ALIVE = 2

# Room constants
MIN_PLAYERS = 3
MAX_PLAYERS_PER_ROOM = 50
MAX_NAME_LENGTH = 20

# Default phase durations in seconds
DEFAULT_SETTINGS = {
    'word_reveal_time': 10,
    'clue_time_per_player': 5,
    'discussion_time': 180,
    'voting_time': 120,
}

# Client-side aliases for settings keys
SETTINGS_ALIASES = {
    'wordRevealTime': 'word_reveal_time',
    'clueTimePerPlayer': 'clue_time_per_player',
    'discussionTime': 'discussion_time',
    'votingTime': 'voting_time',
}

# Winner types
WINNER_TYPES = {
    'MAJORITY': 'MAJORITY',
    'IMPOSTER': 'IMPOSTER',
}

WIN_MESSAGES = {
    'MAJORITY': 'The imposter has been caught! Majority wins!',
    'IMPOSTER': 'The imposter survived! Imposter wins!',
}

# Rejection reason codes returned by managers
REJECTIONS = {
    'SESSION_NOT_FOUND': 'session_not_found',
    'PLAYER_NOT_FOUND': 'player_not_found',
    'WRONG_PHASE': 'wrong_phase',
    'NAME_TAKEN': 'name_taken',
    'INVALID_NAME': 'invalid_name',
    'GAME_IN_PROGRESS': 'game_in_progress',
    'ROOM_FULL': 'room_full',
    'VOTER_NOT_ALIVE': 'voter_not_alive',
    'TARGET_NOT_ALIVE': 'target_not_alive',
    'SELF_VOTE': 'self_vote',
    'ALREADY_VOTED': 'already_voted',
    'NO_TIE_BREAK_PENDING': 'no_tie_break_pending',
    'TIE_BREAK_PENDING': 'tie_break_pending',
    'NOT_ENOUGH_PLAYERS': 'not_enough_players',
    'INVALID_SETTING': 'invalid_setting',
    'SETTINGS_LOCKED': 'settings_locked',
    'PLAYER_NOT_ALIVE': 'player_not_alive',
    'ROOM_CODES_EXHAUSTED': 'room_codes_exhausted',
}

# Human-readable text for each rejection code
REJECTION_MESSAGES = {
    'session_not_found': 'Game not found. Check the room code.',
    'player_not_found': 'Invalid player',
    'wrong_phase': 'That action is not allowed right now',
    'name_taken': 'That name is already taken. Choose a different name.',
    'invalid_name': 'Names must be 1-20 letters, numbers or spaces',
    'game_in_progress': 'Game already started. Cannot join.',
    'room_full': 'This room is full',
    'voter_not_alive': 'You are eliminated',
    'target_not_alive': 'Target is eliminated',
    'self_vote': 'Cannot vote for yourself',
    'already_voted': 'Already voted',
    'no_tie_break_pending': 'There is no tie to break',
    'tie_break_pending': 'Resolve the tie-break first',
    'not_enough_players': f'Need at least {MIN_PLAYERS} players alive to start a round',
    'invalid_setting': 'Settings must be positive whole numbers of seconds',
    'settings_locked': 'Settings cannot change while a round is in progress',
    'player_not_alive': 'Player is already eliminated',
    'room_codes_exhausted': 'Could not allocate a room code, try again',
}
