"""Core rules engine package for Plump."""

__all__ = [
    "cards",
    "deck",
    "rules_schema",
    "rejections",
    "state",
    "trick",
    "protocol",
    "bidding",
    "mechanics",
    "scoring",
    "timer",
    "reducer",
    "game",
    "service",
]
