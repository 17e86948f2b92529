"""
PLATO Learn Engine - Progress state machine and unlock rules.

This module provides:
- ProgressStore: Persist the progress aggregate through a key-value backend
- ScoreLedger: Per-round answer counters and best scores
- Unlock rules: Prerequisite checks over the round graph
- Streak rules: Day rollover, increment and reset
- ProgressionController: Public API composing all of the above
- Achievements: Predicate-based achievement unlocking
"""

from .storage import (
    ProgressStore,
    KeyValueBackend,
    MemoryBackend,
    SQLiteBackend,
    parse_progress,
)

from .ledger import (
    ScoreLedger,
    percentage,
)

from .unlock import (
    is_round_unlocked,
    missing_prerequisites,
)

from .streak import (
    reconcile_streak,
    increment_streak,
    reset_streak,
)

from .controller import ProgressionController

from .achievements import (
    Achievement,
    DEFAULT_ACHIEVEMENTS,
    evaluate_achievements,
)

__all__ = [
    # Storage
    "ProgressStore",
    "KeyValueBackend",
    "MemoryBackend",
    "SQLiteBackend",
    "parse_progress",
    # Ledger
    "ScoreLedger",
    "percentage",
    # Unlock
    "is_round_unlocked",
    "missing_prerequisites",
    # Streak
    "reconcile_streak",
    "increment_streak",
    "reset_streak",
    # Controller
    "ProgressionController",
    # Achievements
    "Achievement",
    "DEFAULT_ACHIEVEMENTS",
    "evaluate_achievements",
]
