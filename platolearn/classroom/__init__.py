"""
PLATO Learn Classroom - Runtime components for content and round play.

This module provides:
- ModuleLoader: Load module registry and questions from disk
- Navigator: Round availability, skill tree and summaries
- RoundSession: Answer flow for one attempt at a round
"""

from .loader import (
    ModuleLoader,
    MODULE_FILE,
)

from .navigator import (
    Navigator,
    RoundAvailability,
    NavigationRound,
    NavigationRow,
)

from .session import (
    RoundSession,
    RoundResult,
)

__all__ = [
    # Loader
    "ModuleLoader",
    "MODULE_FILE",
    # Navigator
    "Navigator",
    "RoundAvailability",
    "NavigationRound",
    "NavigationRow",
    # Session
    "RoundSession",
    "RoundResult",
]
