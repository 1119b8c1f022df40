"""Gambit: chess rules, notation and opening lookup."""

__version__ = "0.1.0"
