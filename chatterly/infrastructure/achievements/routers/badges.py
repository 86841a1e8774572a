"""API routes for badges."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatterly.application.achievements.use_cases.badge_use_case import BadgeUseCase
from chatterly.core import container
from chatterly.domain.achievements.entities.badge_definition import (
    BadgeDefinition as BadgeDefinitionEntity,
)
from chatterly.domain.common.exceptions import DomainError
from chatterly.exceptions import ChatterlyError
from chatterly.infrastructure.achievements.schemas import (
    BadgeCriteria,
    BadgeDefinition,
    BadgeProgress,
    BadgesResponse,
    EarnedBadge,
)
from chatterly.infrastructure.common.di import inject_use_case
from chatterly.infrastructure.common.identity import CurrentUserId

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/badges", tags=["badges"])


def to_definition_schema(definition: BadgeDefinitionEntity) -> BadgeDefinition:
    return BadgeDefinition(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        image_url=definition.image_url,
        category=definition.category,
        rarity=definition.rarity,
        criteria=BadgeCriteria(**definition.criteria.to_dict()),
    )


@router.get(
    "",
    response_model=BadgesResponse,
    status_code=status.HTTP_200_OK,
)
def get_badges(
    user_id: CurrentUserId,
    use_case: BadgeUseCase = Depends(inject_use_case(container.badge_use_case)),
) -> BadgesResponse:
    """
    Get the current user's earned badges, the badges still available and
    progress toward them.

    Evaluation is read-only; it never awards badges.

    Args:
        user_id: Trusted id of the learner
        use_case: BadgeUseCase injected via dependency container

    Returns:
        Earned badges, available badges and progress entries

    Raises:
        HTTPException: If the badges cannot be loaded
    """
    try:
        overview = use_case.list_badges(user_id)
        return BadgesResponse(
            earned_badges=[
                EarnedBadge(
                    id=view.badge.id.value,
                    badge_type=view.badge.badge_type,
                    awarded_at=view.badge.awarded_at,
                    badge_data=view.badge.badge_data or None,
                    definition=to_definition_schema(view.definition),
                )
                for view in overview.earned
            ],
            available_badges=[to_definition_schema(d) for d in overview.available],
            progress=[
                BadgeProgress(
                    badge_id=p.badge_id,
                    current_progress=p.current_progress,
                    required_progress=p.required_progress,
                    percentage=p.percentage,
                )
                for p in overview.progress
            ],
        )
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to load badges for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
