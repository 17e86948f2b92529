"""
Unlock rules for the round prerequisite graph.

A round is reachable when every one of its prerequisites has been completed
with a best score at or above UNLOCK_THRESHOLD. Rounds without prerequisites
are roots and always reachable. Nothing is cached: the ledger may change
between calls.
"""

from typing import Optional, Sequence

from platolearn.config import UNLOCK_THRESHOLD

from .ledger import ScoreLedger


def is_prerequisite_met(ledger: ScoreLedger, module_id: str, round_id: str) -> bool:
    if not ledger.has_score(module_id, round_id):
        return False
    score = ledger.get_round_score(module_id, round_id)
    return score.completed and score.best_score >= UNLOCK_THRESHOLD


def missing_prerequisites(
    ledger: ScoreLedger,
    module_id: str,
    prerequisites: Optional[Sequence[str]],
) -> list[str]:
    """Prerequisite IDs that are not yet satisfied, in their listed order."""
    if not prerequisites:
        return []
    return [
        prereq for prereq in prerequisites
        if not is_prerequisite_met(ledger, module_id, prereq)
    ]


def is_round_unlocked(
    ledger: ScoreLedger,
    module_id: str,
    prerequisites: Optional[Sequence[str]],
) -> bool:
    """Check that ALL prerequisites are satisfied (AND across parents)."""
    if not prerequisites:
        return True
    return all(is_prerequisite_met(ledger, module_id, prereq) for prereq in prerequisites)
