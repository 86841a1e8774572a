"""DTOs for progress use cases."""

from dataclasses import dataclass

from chatterly.domain.progress.metrics import ProgressMetrics


@dataclass(frozen=True)
class ProgressReport:
    """Progress snapshot plus the recent-badge count shown next to it."""

    metrics: ProgressMetrics
    badges_earned_this_month: int = 0
    is_fallback: bool = False
