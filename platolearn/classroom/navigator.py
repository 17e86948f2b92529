"""
Navigator - Round availability, skill tree layout, and progress summaries.

Provides:
- Round availability from scores and prerequisites
- Skill tree rows with status indicators
- Recommended next round
- Dashboard summaries
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from platolearn.engine import ProgressionController
from platolearn.schemas import LearningModule, Round, RoundScore, RoundStatus

from .loader import ModuleLoader


class RoundAvailability(str, Enum):
    """Round availability status for UI display."""
    LOCKED = "locked"           # Prerequisites not met
    AVAILABLE = "available"     # Can start
    IN_PROGRESS = "in_progress" # Answers recorded, not completed
    COMPLETED = "completed"     # Finished at least once


@dataclass
class NavigationRound:
    """Round with navigation metadata."""
    round: Round
    availability: RoundAvailability
    score: RoundScore
    missing_prerequisites: list[str]  # IDs of unmet prerequisites


@dataclass
class NavigationRow:
    """One row of the skill tree."""
    row: int
    rounds: list[NavigationRound]


class Navigator:
    """
    Navigate a module's round graph.

    Combines ModuleLoader (content) with ProgressionController (user state).
    Availability is recomputed on every call.
    """

    def __init__(self, loader: ModuleLoader, controller: ProgressionController):
        self.loader = loader
        self.controller = controller

    def _module(self, module_id: str) -> Optional[LearningModule]:
        return self.loader.get_module(module_id)

    # -------------------------------------------------------------------------
    # Availability Checking
    # -------------------------------------------------------------------------

    def get_round_availability(
        self, module_id: str, round_id: str
    ) -> tuple[RoundAvailability, list[str]]:
        """
        Check round availability based on progress and prerequisites.

        Returns:
            Tuple of (availability status, list of missing prerequisite IDs)
        """
        module = self._module(module_id)
        rnd = module.get_round(round_id) if module else None
        if rnd is None:
            return RoundAvailability.LOCKED, []

        status = self.controller.get_round_status(module_id, round_id)
        if status == RoundStatus.COMPLETED:
            return RoundAvailability.COMPLETED, []
        if status == RoundStatus.IN_PROGRESS:
            return RoundAvailability.IN_PROGRESS, []

        missing = self.controller.missing_prerequisites(module_id, rnd.prerequisites)
        if missing:
            return RoundAvailability.LOCKED, missing
        return RoundAvailability.AVAILABLE, []

    def is_round_available(self, module_id: str, round_id: str) -> bool:
        """Check if a round can be started or continued."""
        availability, _ = self.get_round_availability(module_id, round_id)
        return availability != RoundAvailability.LOCKED

    def get_available_rounds(self, module_id: str) -> list[Round]:
        module = self._module(module_id)
        if module is None:
            return []
        return [rnd for rnd in module.rounds if self.is_round_available(module_id, rnd.id)]

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_recommended_round_id(self, module_id: str) -> Optional[str]:
        """
        Get the recommended round for the learner.

        Priority:
        1. First round in progress
        2. First available round not yet completed
        3. First round
        """
        module = self._module(module_id)
        if module is None or not module.rounds:
            return None

        availability = {
            rnd.id: self.get_round_availability(module_id, rnd.id)[0] for rnd in module.rounds
        }
        for wanted in (RoundAvailability.IN_PROGRESS, RoundAvailability.AVAILABLE):
            for rnd in module.rounds:
                if availability[rnd.id] == wanted:
                    return rnd.id

        return module.rounds[0].id

    def get_navigation_tree(self, module_id: str) -> list[NavigationRow]:
        """Get the module's skill tree, grouped by row and ordered by column."""
        module = self._module(module_id)
        if module is None:
            return []

        rows: dict[int, list[NavigationRound]] = {}
        for rnd in sorted(module.rounds, key=lambda r: (r.row, r.col)):
            availability, missing = self.get_round_availability(module_id, rnd.id)
            rows.setdefault(rnd.row, []).append(NavigationRound(
                round=rnd,
                availability=availability,
                score=self.controller.get_round_score(module_id, rnd.id),
                missing_prerequisites=missing,
            ))

        return [NavigationRow(row=row, rounds=rows[row]) for row in sorted(rows)]

    def get_status_indicator(self, module_id: str, round_id: str) -> str:
        """
        Get status indicator for tree display.

        Returns:
            ✓ for completed and passed
            ✗ for completed below the unlock threshold
            → for in progress
            ○ for available
            ◌ for locked
        """
        availability, _ = self.get_round_availability(module_id, round_id)

        if availability == RoundAvailability.COMPLETED:
            return "✓" if self.controller.is_round_passed(module_id, round_id) else "✗"
        elif availability == RoundAvailability.IN_PROGRESS:
            return "→"
        elif availability == RoundAvailability.AVAILABLE:
            return "○"
        else:
            return "◌"

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_module_summary(self, module_id: str) -> dict:
        """Completion stats for one module."""
        module = self._module(module_id)
        rounds = module.rounds if module else []
        completed = sum(
            1 for rnd in rounds
            if self.controller.get_round_status(module_id, rnd.id) == RoundStatus.COMPLETED
        )
        passed = sum(1 for rnd in rounds if self.controller.is_round_passed(module_id, rnd.id))
        total = len(rounds)

        return {
            "id": module_id,
            "name": module.name if module else module_id,
            "total_rounds": total,
            "completed": completed,
            "passed": passed,
            "completion_percent": round(passed / total * 100, 1) if total > 0 else 0,
            "recommended_round_id": self.get_recommended_round_id(module_id),
        }

    def get_progress_summary(self) -> dict:
        """Get progress summary for dashboard display."""
        modules = [self.get_module_summary(m.id) for m in self.loader.get_all_modules()]
        return {
            "xp": self.controller.xp,
            "streak": self.controller.streak,
            "achievements": self.controller.achievements,
            "rounds_passed": sum(m["passed"] for m in modules),
            "total_rounds": sum(m["total_rounds"] for m in modules),
            "modules": modules,
        }
