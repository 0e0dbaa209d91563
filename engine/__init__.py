"""Core rules engine package for Klondike solitaire."""

__all__ = [
    "cards",
    "board",
    "deck",
    "rules",
    "moves",
    "scoring",
    "history",
    "game",
    "rules_schema",
    "service",
]
