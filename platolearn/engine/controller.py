"""
ProgressionController - The single mutation surface for learner progress.

Composes the score ledger, unlock rules, streak rules and the progress store:
- Loads persisted progress and reconciles the streak once, on construction
- Persists the whole aggregate after every mutation
- Answers read-only queries (scores, unlock status) from in-memory state

Construct one controller at start-up and hand it to whatever needs it.
"""

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from platolearn.config import UNLOCK_THRESHOLD
from platolearn.schemas import RoundScore, RoundStatus, UserProgress

from . import streak as streak_rules
from .ledger import ScoreLedger
from .storage import ProgressStore
from .unlock import is_round_unlocked, missing_prerequisites

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


class ProgressionController:
    """
    Owns the in-memory progress aggregate for one local user.

    In-memory state is authoritative for the session: a failed save is
    logged by the store and the next mutation simply tries again.
    """

    def __init__(self, store: Optional[ProgressStore] = None, clock: Clock = date.today):
        """
        Load progress and roll the streak forward to today.

        Args:
            store: Progress store (default: SQLite store at ~/.platolearn/progress.db)
            clock: Returns the current local date; injectable for tests
        """
        self.store = store if store is not None else ProgressStore()
        self.clock = clock

        loaded = self.store.load()
        if loaded is None:
            logger.info("No saved progress found, starting with defaults")
            loaded = UserProgress(last_active_date=self.clock())
        elif "last_active_date" not in loaded.model_fields_set:
            # Record predates the field; count it as active today.
            loaded = loaded.model_copy(update={"last_active_date": self.clock()})
        self._set_progress(loaded)
        self.reconcile_streak()

    def _set_progress(self, progress: UserProgress):
        self._progress = progress
        self._ledger = ScoreLedger(progress.module_progress)

    def _persist(self) -> bool:
        return self.store.save(self._progress)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> UserProgress:
        """A deep copy of the aggregate; edits to it are not persisted."""
        return self._progress.model_copy(deep=True)

    @property
    def xp(self) -> int:
        return self._progress.xp

    @property
    def streak(self) -> int:
        return self._progress.streak

    @property
    def achievements(self) -> list[str]:
        return list(self._progress.achievements)

    def get_round_score(self, module_id: str, round_id: str) -> RoundScore:
        return self._ledger.get_round_score(module_id, round_id)

    def get_module_scores(self, module_id: str) -> dict[str, RoundScore]:
        return self._ledger.get_module_scores(module_id)

    def is_round_unlocked(
        self, module_id: str, prerequisites: Optional[Sequence[str]] = None
    ) -> bool:
        return is_round_unlocked(self._ledger, module_id, prerequisites)

    def missing_prerequisites(
        self, module_id: str, prerequisites: Optional[Sequence[str]] = None
    ) -> list[str]:
        return missing_prerequisites(self._ledger, module_id, prerequisites)

    def get_round_status(self, module_id: str, round_id: str) -> RoundStatus:
        """Position of a round in its attempt lifecycle."""
        score = self._ledger.get_round_score(module_id, round_id)
        if score.completed:
            return RoundStatus.COMPLETED
        if score.total > 0:
            return RoundStatus.IN_PROGRESS
        return RoundStatus.NOT_STARTED

    def is_round_passed(self, module_id: str, round_id: str) -> bool:
        score = self._ledger.get_round_score(module_id, round_id)
        return score.completed and score.best_score >= UNLOCK_THRESHOLD

    # -------------------------------------------------------------------------
    # Rounds
    # -------------------------------------------------------------------------

    def record_answer(self, module_id: str, round_id: str, is_correct: bool):
        """Count an answer towards the current attempt of a round."""
        self._ledger.record_answer(module_id, round_id, is_correct)
        self._persist()

    def complete_round(self, module_id: str, round_id: str, total_questions: int) -> int:
        """
        Finish the current attempt of a round.

        Args:
            module_id: Module containing the round
            round_id: Round being completed
            total_questions: Number of questions in the round (the denominator)

        Returns:
            Percentage scored on this attempt
        """
        pct = self._ledger.complete_round(module_id, round_id, total_questions)
        self._persist()
        best = self._ledger.get_round_score(module_id, round_id).best_score
        logger.info(f"Completed {module_id}/{round_id}: {pct}% (best {best}%)")
        return pct

    def reset_round_progress(self, module_id: str, round_id: str):
        """Start a fresh attempt; the best score survives."""
        if self._ledger.reset_round_progress(module_id, round_id):
            self._persist()

    # -------------------------------------------------------------------------
    # XP, streak, achievements
    # -------------------------------------------------------------------------

    def add_xp(self, amount: int):
        if amount < 0:
            raise ValueError(f"XP amount must be non-negative, got {amount}")
        self._progress.xp += amount
        self._persist()

    def increment_streak(self):
        self._set_progress(streak_rules.increment_streak(self._progress, self.clock()))
        self._persist()

    def reset_streak(self):
        self._set_progress(streak_rules.reset_streak(self._progress))
        self._persist()

    def reconcile_streak(self):
        """Apply day-rollover rules. Runs once at construction."""
        before = self._progress
        after = streak_rules.reconcile_streak(before, self.clock())
        if after is before:
            return
        if after.streak != before.streak:
            logger.info(f"Streak reset after inactivity (last active {before.last_active_date})")
        self._set_progress(after)
        self._persist()

    def unlock_achievement(self, achievement_id: str) -> bool:
        """
        Add an achievement once.

        Returns:
            True if newly unlocked, False if it was already held
        """
        if achievement_id in self._progress.achievements:
            return False
        self._progress.achievements.append(achievement_id)
        self._persist()
        logger.info(f"Achievement unlocked: {achievement_id}")
        return True
