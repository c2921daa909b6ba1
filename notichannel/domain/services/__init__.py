"""
Domain Services Package

Architectural Intent:
- Contains the dispatch algorithm shared by every channel flavor
"""

from notichannel.domain.services.dispatch import (
    Outcome,
    dispatch,
    raise_collected,
    settle,
)

__all__ = [
    "Outcome",
    "dispatch",
    "raise_collected",
    "settle",
]
