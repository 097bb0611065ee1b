"""Game constants for Oh Hell."""

# Deck
DECK_SIZE = 52

# Game limits
MIN_PLAYERS = 2
MAX_PLAYERS = 7

# Default scoring (Wizard-style: 20 + 10 per trick, -10 per missed trick)
SCORE_SUCCESS_BASE = 20
SCORE_SUCCESS_PER_TRICK = 10
SCORE_MISS_PER_TRICK = 10
