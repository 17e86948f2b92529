"""Tests for day-rollover and answer-driven streak rules."""

from datetime import date, timedelta

from platolearn.engine import increment_streak, reconcile_streak, reset_streak
from platolearn.schemas import RoundScore, UserProgress

TODAY = date(2024, 3, 15)


def progress_on(last_active, streak=4) -> UserProgress:
    return UserProgress(streak=streak, last_active_date=last_active)


class TestReconcileStreak:

    def test_same_day_unchanged(self):
        progress = progress_on(TODAY)
        assert reconcile_streak(progress, TODAY) is progress

    def test_yesterday_keeps_streak(self):
        result = reconcile_streak(progress_on(TODAY - timedelta(days=1)), TODAY)
        assert result.streak == 4
        assert result.last_active_date == TODAY

    def test_two_days_ago_resets(self):
        result = reconcile_streak(progress_on(TODAY - timedelta(days=2)), TODAY)
        assert result.streak == 0
        assert result.last_active_date == TODAY

    def test_long_gap_resets(self):
        result = reconcile_streak(progress_on(date(2023, 1, 1)), TODAY)
        assert result.streak == 0

    def test_future_date_resets(self):
        result = reconcile_streak(progress_on(TODAY + timedelta(days=1)), TODAY)
        assert result.streak == 0
        assert result.last_active_date == TODAY

    def test_invalid_date_resets(self):
        result = reconcile_streak(progress_on(None), TODAY)
        assert result.streak == 0
        assert result.last_active_date == TODAY

    def test_month_boundary(self):
        result = reconcile_streak(progress_on(date(2024, 2, 29)), date(2024, 3, 1))
        assert result.streak == 4

    def test_does_not_mutate_input(self):
        progress = progress_on(TODAY - timedelta(days=5))
        reconcile_streak(progress, TODAY)
        assert progress.streak == 4


class TestAnswerDrivenStreak:

    def test_increment_sets_today(self):
        result = increment_streak(progress_on(TODAY - timedelta(days=1), streak=2), TODAY)
        assert result.streak == 3
        assert result.last_active_date == TODAY

    def test_reset_keeps_date(self):
        last = TODAY - timedelta(days=1)
        result = reset_streak(progress_on(last, streak=7))
        assert result.streak == 0
        assert result.last_active_date == last


class TestCopiesAreIndependent:

    def shared_state(self, last_active):
        return UserProgress(
            streak=2,
            last_active_date=last_active,
            module_progress={"sql": {"r1": RoundScore(correct=1, total=2)}},
            achievements=["first_win"],
        )

    def assert_independent(self, original, result):
        result.achievements.append("streak_5")
        result.module_progress["sql"]["r2"] = RoundScore()
        result.module_progress["sql"]["r1"].correct = 2
        assert original.achievements == ["first_win"]
        assert list(original.module_progress["sql"]) == ["r1"]
        assert original.module_progress["sql"]["r1"].correct == 1

    def test_reconcile_rollover(self):
        original = self.shared_state(TODAY - timedelta(days=1))
        self.assert_independent(original, reconcile_streak(original, TODAY))

    def test_reconcile_reset(self):
        original = self.shared_state(TODAY - timedelta(days=3))
        self.assert_independent(original, reconcile_streak(original, TODAY))

    def test_increment(self):
        original = self.shared_state(TODAY)
        self.assert_independent(original, increment_streak(original, TODAY))

    def test_reset(self):
        original = self.shared_state(TODAY)
        self.assert_independent(original, reset_streak(original))
