"""Search engine for the computer-controlled side."""

from .evaluation import evaluate, mobility, terminal_score
from .search import DEFAULT_DEPTH, Decision, SearchEngine, split_amounts

__all__ = [
    "DEFAULT_DEPTH",
    "Decision",
    "SearchEngine",
    "evaluate",
    "mobility",
    "split_amounts",
    "terminal_score",
]
