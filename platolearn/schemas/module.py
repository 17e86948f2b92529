"""
Module content schemas for PLATO Learn.

Defines Pydantic models for the content graph:
- Questions (all supported question types share one model)
- Rounds with prerequisite links (the skill tree nodes)
- Learning modules and their loaded question data
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    FILL_BLANK = "fill-blank"            # click to select answer (default)
    DRAG_DROP = "drag-drop"
    TYPE_IN = "type-in"
    FREEFORM_SQL = "freeform-sql"
    SPOT_ERROR = "spot-error"
    MULTIPLE_CHOICE = "multiple-choice"
    CODE_ORDERING = "code-ordering"
    ERROR_FIX = "error-fix"
    MULTI_BLANK = "multi-blank"
    WORD_PROBLEM = "word-problem"
    MULTI_DRAG_DROP = "multi-drag-drop"


class Question(BaseModel):
    """One practice question. Rendering and answer checking live in the UI."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    type: QuestionType = QuestionType.FILL_BLANK
    ctx: list[str] = []
    goal: str = ""
    q: str
    a: Union[str, list[str]]          # list for multi-blank / ordering
    distractors: list[str] = []
    hint: str = ""
    explanation: Optional[str] = None
    # multiple-choice
    choices: Optional[list[str]] = None
    # error-fix
    error_code: Optional[str] = Field(None, alias="errorCode")
    correct_code: Optional[str] = Field(None, alias="correctCode")
    error_location: Optional[str] = Field(None, alias="errorLocation")


class Round(BaseModel):
    """
    A round within a module; the node type of the skill tree.

    Rounds may share prerequisites (branching) and may require several
    prerequisites (convergence). An empty prerequisite list marks a root.
    """
    id: str
    name: str = ""
    description: str = ""
    questions: list[Question] = []
    prerequisites: list[str] = []     # round IDs, all must be passed
    row: int = 0                      # skill tree row (0 = top)
    col: int = 0                      # skill tree column (0 = left)


class LearningModule(BaseModel):
    """Registry entry for a learning module."""
    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = ""
    questions_path: str = "questions.json"   # relative to the module directory
    rounds: list[Round] = []

    def get_round(self, round_id: str) -> Optional[Round]:
        for rnd in self.rounds:
            if rnd.id == round_id:
                return rnd
        return None


class QuestionData(BaseModel):
    """Full question data loaded from a module's questions file."""
    # table name -> column description, shown alongside SQL questions
    schema_: dict[str, str] = Field(default_factory=dict, alias="schema")
    rounds: list[Round] = []

    model_config = ConfigDict(populate_by_name=True)
