"""
RoundSession - Drive one attempt at a round, question by question.

The question renderers decide whether an answer is correct and report it
here. The session turns that into progress updates:
- correct: answer recorded, XP awarded, streak incremented
- incorrect or skipped: answer recorded, streak reset
- after the last question: round completed, achievements evaluated
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from platolearn.config import XP_PER_CORRECT_ANSWER
from platolearn.engine import ProgressionController, evaluate_achievements
from platolearn.errors import ContentError, RoundLockedError
from platolearn.schemas import Question, Round

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Outcome of a finished attempt."""
    round_id: str
    correct: int
    answered: int
    percentage: int
    best_score: int
    passed: bool        # best score clears the unlock threshold
    new_achievements: list[str] = field(default_factory=list)


class RoundSession:
    """One learner attempt at a round, mirroring the lesson page flow."""

    def __init__(
        self,
        controller: ProgressionController,
        module_id: str,
        round: Round,
        xp_per_correct: int = XP_PER_CORRECT_ANSWER,
    ):
        self.controller = controller
        self.module_id = module_id
        self.round = round
        self.xp_per_correct = xp_per_correct
        self.question_index = 0
        self.correct = 0
        self.answered = 0
        self.awaiting_advance = False
        self.result: Optional[RoundResult] = None

    @property
    def current_question(self) -> Optional[Question]:
        if self.result is not None or self.question_index >= len(self.round.questions):
            return None
        return self.round.questions[self.question_index]

    @property
    def is_finished(self) -> bool:
        return self.result is not None

    def start(self):
        """
        Begin a fresh attempt.

        Raises:
            RoundLockedError: If the round's prerequisites are not met
        """
        if not self.controller.is_round_unlocked(self.module_id, self.round.prerequisites):
            missing = self.controller.missing_prerequisites(self.module_id, self.round.prerequisites)
            raise RoundLockedError(
                f"Round {self.module_id}/{self.round.id} is locked; missing {missing}"
            )
        self._reset()

    def retry(self):
        """Start over; the round's best score is kept."""
        self._reset()

    def _reset(self):
        self.controller.reset_round_progress(self.module_id, self.round.id)
        self.question_index = 0
        self.correct = 0
        self.answered = 0
        self.awaiting_advance = False
        self.result = None

    def answer(self, is_correct: bool):
        """Report the renderer's verdict for the current question."""
        if self.current_question is None:
            raise ContentError("No question to answer; the round is finished")
        if self.awaiting_advance:
            raise ContentError("Current question already answered; call advance()")

        self.controller.record_answer(self.module_id, self.round.id, is_correct)
        self.answered += 1
        if is_correct:
            self.correct += 1
            self.controller.add_xp(self.xp_per_correct)
            self.controller.increment_streak()
        else:
            self.controller.reset_streak()
        self.awaiting_advance = True

    def skip(self) -> Optional[RoundResult]:
        """Skip the current question; it counts as incorrect."""
        if not self.awaiting_advance:
            self.answer(False)
        return self.advance()

    def advance(self) -> Optional[RoundResult]:
        """
        Move to the next question.

        Returns:
            The round result once the last question has been passed,
            otherwise None
        """
        if self.result is not None:
            return self.result
        self.awaiting_advance = False
        self.question_index += 1
        if self.question_index < len(self.round.questions):
            return None
        return self._finish()

    def _finish(self) -> RoundResult:
        total_questions = len(self.round.questions)
        pct = self.controller.complete_round(self.module_id, self.round.id, total_questions)
        new_achievements = evaluate_achievements(self.controller)

        self.result = RoundResult(
            round_id=self.round.id,
            correct=self.correct,
            answered=self.answered,
            percentage=pct,
            best_score=self.controller.get_round_score(self.module_id, self.round.id).best_score,
            passed=self.controller.is_round_passed(self.module_id, self.round.id),
            new_achievements=new_achievements,
        )
        return self.result
