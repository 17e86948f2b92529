"""
Achievement definitions and evaluation.

An achievement is a named predicate over the progress aggregate. Evaluation
unlocks every satisfied achievement through the controller, which keeps
unlocking idempotent.
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from platolearn.config import UNLOCK_THRESHOLD
from platolearn.schemas import RoundScore, UserProgress

from .controller import ProgressionController


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    condition: Callable[[UserProgress], bool]


def _all_scores(progress: UserProgress) -> Iterable[RoundScore]:
    for rounds in progress.module_progress.values():
        yield from rounds.values()


def _has_passed_round(progress: UserProgress) -> bool:
    return any(s.completed and s.best_score >= UNLOCK_THRESHOLD for s in _all_scores(progress))


def _has_perfect_round(progress: UserProgress) -> bool:
    return any(s.best_score == 100 for s in _all_scores(progress))


DEFAULT_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_win",
        name="First Win",
        description="Pass your first round",
        icon="🏆",
        condition=_has_passed_round,
    ),
    Achievement(
        id="perfect_round",
        name="Flawless",
        description="Score 100% on a round",
        icon="💯",
        condition=_has_perfect_round,
    ),
    Achievement(
        id="xp_100",
        name="Centurion",
        description="Earn 100 XP",
        icon="⭐",
        condition=lambda p: p.xp >= 100,
    ),
    Achievement(
        id="streak_5",
        name="On Fire",
        description="Reach a streak of 5",
        icon="🔥",
        condition=lambda p: p.streak >= 5,
    ),
)


def evaluate_achievements(
    controller: ProgressionController,
    achievements: Iterable[Achievement] = DEFAULT_ACHIEVEMENTS,
) -> list[str]:
    """
    Unlock every achievement whose condition currently holds.

    Returns:
        IDs unlocked by this call, in definition order
    """
    progress = controller.progress
    newly_unlocked = []
    for achievement in achievements:
        if achievement.id in progress.achievements:
            continue
        if achievement.condition(progress) and controller.unlock_achievement(achievement.id):
            newly_unlocked.append(achievement.id)
    return newly_unlocked
