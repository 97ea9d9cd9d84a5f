"""Chat, game and utility features for group chat bots."""

__version__ = "0.1.0"