"""Progress context schemas."""

from chatterly.infrastructure.progress.schemas.progress_schemas import (
    DetailedMetrics,
    LanguageStats,
    OverallStats,
    PerformanceMetrics,
    ProgressResponse,
    RecentActivity,
)

__all__ = [
    "DetailedMetrics",
    "LanguageStats",
    "OverallStats",
    "PerformanceMetrics",
    "ProgressResponse",
    "RecentActivity",
]
