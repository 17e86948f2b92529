"""
Progress tracking schemas for PLATO Learn.

Defines Pydantic models for learner progress including:
- Per-round score counters
- The user progress aggregate (xp, streak, module progress, achievements)

Models are persisted with camelCase aliases (bestScore, lastActiveDate, ...).
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RoundStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class RoundScore(BaseModel):
    """Score counters for one round of one module."""
    model_config = ConfigDict(populate_by_name=True)

    correct: int = Field(0, ge=0)
    total: int = Field(0, ge=0)     # answers recorded in the current attempt
    completed: bool = False
    best_score: int = Field(0, ge=0, le=100, alias="bestScore")  # percent, never decreases

    @model_validator(mode="after")
    def correct_within_total(self):
        if self.correct > self.total:
            raise ValueError(f"correct ({self.correct}) exceeds total ({self.total})")
        return self


class UserProgress(BaseModel):
    """Root progress aggregate for the single local user."""
    model_config = ConfigDict(populate_by_name=True)

    xp: int = Field(0, ge=0)
    streak: int = Field(0, ge=0)
    last_active_date: Optional[date] = Field(default_factory=date.today, alias="lastActiveDate")
    module_progress: dict[str, dict[str, RoundScore]] = Field(
        default_factory=dict, alias="moduleProgress"
    )
    achievements: list[str] = Field(default_factory=list)

    @field_validator("last_active_date", mode="before")
    @classmethod
    def parse_active_date(cls, v):
        # Unreadable dates load as None; streak reconciliation treats them as stale.
        if v is None or isinstance(v, date):
            return v
        if isinstance(v, str):
            try:
                return date.fromisoformat(v[:10])
            except ValueError:
                return None
        return None

    @field_validator("achievements")
    @classmethod
    def unique_achievements(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def to_json(self) -> str:
        """Serialize with the persisted (camelCase) field names."""
        return self.model_dump_json(by_alias=True)
