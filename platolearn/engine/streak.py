"""
Daily streak rules.

Streaks move on answers, not on the calendar: a correct answer increments,
a wrong one resets. The calendar only matters once per boot, when a skipped
day breaks the streak.

All functions return new, fully independent UserProgress objects and never
touch storage.
"""

from datetime import date, timedelta

from platolearn.schemas import UserProgress


def reconcile_streak(progress: UserProgress, today: date) -> UserProgress:
    """
    Roll the streak forward to today, or reset it after a missed day.

    - active today: unchanged
    - active yesterday: date moves to today, streak kept
    - anything else (gap, future date, unreadable date): streak reset
    """
    last_active = progress.last_active_date

    if last_active == today:
        return progress

    if last_active == today - timedelta(days=1):
        return progress.model_copy(update={"last_active_date": today}, deep=True)

    return progress.model_copy(update={"streak": 0, "last_active_date": today}, deep=True)


def increment_streak(progress: UserProgress, today: date) -> UserProgress:
    return progress.model_copy(
        update={"streak": progress.streak + 1, "last_active_date": today},
        deep=True,
    )


def reset_streak(progress: UserProgress) -> UserProgress:
    return progress.model_copy(update={"streak": 0}, deep=True)
