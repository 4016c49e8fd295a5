"""Sheep Battle: hex-grid stacking game with a minimax opponent."""

__version__ = "0.1.0"
