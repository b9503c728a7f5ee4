"""Monster Game - turn-based encounter engine and terminal front-end."""
__version__ = "0.1.0"
