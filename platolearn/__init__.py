"""
PLATO Learn - progression engine for a gamified, modular learning platform.

Subpackages:
- schemas: Pydantic models for progress and module content
- engine: score ledger, unlock rules, streaks, persistence, controller
- classroom: content loading, navigation and round sessions
"""

__version__ = "0.1.0"
