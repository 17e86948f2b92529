"""
PLATO Learn Schemas - Pydantic models for the learning platform.

This module exports all schema classes for:
- Module: questions, rounds, learning modules
- Progress: round scores and the user progress aggregate
"""

# Module schemas
from .module import (
    QuestionType,
    Question,
    Round,
    LearningModule,
    QuestionData,
)

# Progress schemas
from .progress import (
    RoundStatus,
    RoundScore,
    UserProgress,
)

__all__ = [
    # Module
    'QuestionType',
    'Question',
    'Round',
    'LearningModule',
    'QuestionData',
    # Progress
    'RoundStatus',
    'RoundScore',
    'UserProgress',
]
