"""Memory Match: a single-player card matching game."""

__version__ = "0.1.0"
