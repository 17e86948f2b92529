"""
ScoreLedger - Per-(module, round) answer counters and best scores.

Records are created lazily on first write; reads of a missing round return
a zero default without inserting it.
"""

from platolearn.schemas import RoundScore


def percentage(correct: int, total_questions: int) -> int:
    """
    Whole-number percentage of correct answers, rounded half up.

    A round with no questions scores 0.
    """
    if total_questions <= 0:
        return 0
    return (200 * correct + total_questions) // (2 * total_questions)


class ScoreLedger:
    """
    Score records keyed by module ID, then round ID.

    The ledger edits the mapping it is given in place; the owner of that
    mapping is responsible for persisting it afterwards.
    """

    def __init__(self, module_progress: dict[str, dict[str, RoundScore]]):
        self._scores = module_progress

    def _get_or_create(self, module_id: str, round_id: str) -> RoundScore:
        rounds = self._scores.setdefault(module_id, {})
        if round_id not in rounds:
            rounds[round_id] = RoundScore()
        return rounds[round_id]

    def has_score(self, module_id: str, round_id: str) -> bool:
        return round_id in self._scores.get(module_id, {})

    def get_round_score(self, module_id: str, round_id: str) -> RoundScore:
        """Get a copy of the stored score, or a zero default."""
        score = self._scores.get(module_id, {}).get(round_id)
        if score is None:
            return RoundScore()
        return score.model_copy()

    def get_module_scores(self, module_id: str) -> dict[str, RoundScore]:
        """Get copies of all recorded scores for a module."""
        return {
            round_id: score.model_copy()
            for round_id, score in self._scores.get(module_id, {}).items()
        }

    def record_answer(self, module_id: str, round_id: str, is_correct: bool):
        """Count one more answer in the current attempt."""
        score = self._get_or_create(module_id, round_id)
        score.total += 1
        if is_correct:
            score.correct += 1

    def complete_round(self, module_id: str, round_id: str, total_questions: int) -> int:
        """
        Mark a round completed and fold this attempt into the best score.

        The percentage uses the caller's question count, not the recorded
        answer total, and the counters are left as they are.

        Returns:
            Percentage scored on this attempt (0-100)
        """
        score = self._get_or_create(module_id, round_id)
        pct = min(percentage(score.correct, total_questions), 100)
        score.completed = True
        score.best_score = max(score.best_score, pct)
        return pct

    def reset_round_progress(self, module_id: str, round_id: str) -> bool:
        """
        Clear the current attempt, keeping the best score.

        Returns False if the round has no record (nothing to reset).
        """
        rounds = self._scores.get(module_id, {})
        current = rounds.get(round_id)
        if current is None:
            return False
        rounds[round_id] = RoundScore(best_score=current.best_score)
        return True
