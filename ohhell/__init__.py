"""Oh Hell bidding trick-taking game engine and service."""

__version__ = "1.0.0"
