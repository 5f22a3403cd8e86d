"""A Galaga-style arcade shooter with a pygame window and WebSocket remote control."""

__version__ = "0.1.0"