"""Follow-up work shared by practice use cases after user activity is recorded."""

import structlog

from chatterly.application.achievements.protocols.badge_awarder import BadgeAwarderProtocol
from chatterly.application.progress.protocols.progress_cache import ProgressCacheProtocol

logger = structlog.get_logger(__name__)


def refresh_after_activity(
    user_id: str,
    badge_awarder: BadgeAwarderProtocol,
    progress_cache: ProgressCacheProtocol,
    award_badges: bool = True,
) -> None:
    """
    Award newly qualified badges and drop the user's cached progress.

    Badge awarding is best-effort: a failure is logged and never fails the
    activity that triggered it.
    """
    if award_badges:
        try:
            badge_awarder.award_badges(user_id)
        except Exception as e:
            logger.warning("badge_awarding_failed", user_id=user_id, error=str(e))
    progress_cache.invalidate(user_id)
