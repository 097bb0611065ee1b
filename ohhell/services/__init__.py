"""Services around the game engine."""
