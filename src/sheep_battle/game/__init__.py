"""Game sessions and engine-vs-engine matches."""

from .match import MatchResult, play_match
from .session import GameSession

__all__ = ["GameSession", "MatchResult", "play_match"]
