"""Deterministic turn-based grid combat engine (Goblins vs. Elves)."""

__version__ = "0.1.0"
