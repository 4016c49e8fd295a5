"""Utility modules for the Sheep Battle front end."""

from .rich_display import GameDisplay, render_board, setup_rich_logging

__all__ = [
    "GameDisplay",
    "render_board",
    "setup_rich_logging",
]
