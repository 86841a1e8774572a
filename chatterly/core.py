from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from chatterly.application.achievements.use_cases.badge_use_case import BadgeUseCase
from chatterly.application.practice.use_cases.learning_turn_use_case import LearningTurnUseCase
from chatterly.application.practice.use_cases.practice_session_use_case import (
    PracticeSessionUseCase,
)
from chatterly.application.practice.use_cases.session_progress_use_case import (
    SessionProgressUseCase,
)
from chatterly.application.progress.use_cases.progress_use_case import ProgressUseCase
from chatterly.config import get_settings
from chatterly.domain.achievements.catalog import BadgeCatalog
from chatterly.domain.achievements.services import (
    BadgeProgressEvaluator,
    BadgeQualificationService,
)
from chatterly.infrastructure.achievements.repositories.badge_repository import BadgeRepository
from chatterly.infrastructure.practice.repositories.learning_turn_repository import (
    LearningTurnRepository,
)
from chatterly.infrastructure.practice.repositories.practice_session_repository import (
    PracticeSessionRepository,
)
from chatterly.infrastructure.progress.progress_cache import ProgressCache


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Singleton(get_settings)

    # Repositories
    session_repository = providers.Factory(PracticeSessionRepository, db=db)
    turn_repository = providers.Factory(LearningTurnRepository, db=db)
    badge_repository = providers.Factory(BadgeRepository, db=db)

    # Process-wide state
    badge_catalog = providers.Singleton(BadgeCatalog)
    progress_cache = providers.Singleton(
        ProgressCache,
        ttl_seconds=settings.provided.PROGRESS_CACHE_TTL_SECONDS,
        max_entries=settings.provided.PROGRESS_CACHE_MAX_ENTRIES,
    )

    # Domain services (pure domain logic, no db)
    badge_progress_evaluator = providers.Factory(BadgeProgressEvaluator, catalog=badge_catalog)
    badge_qualification_service = providers.Factory(
        BadgeQualificationService,
        catalog=badge_catalog,
        consistency_window_days=settings.provided.CONSISTENCY_WINDOW_DAYS,
    )

    # Achievements module
    badge_use_case = providers.Factory(
        BadgeUseCase,
        session_repository=session_repository,
        turn_repository=turn_repository,
        badge_repository=badge_repository,
        evaluator=badge_progress_evaluator,
        qualification_service=badge_qualification_service,
    )

    # Practice module
    practice_session_use_case = providers.Factory(
        PracticeSessionUseCase,
        session_repository=session_repository,
        turn_repository=turn_repository,
        badge_awarder=badge_use_case,
        progress_cache=progress_cache,
        minimum_session_turns=settings.provided.MINIMUM_SESSION_TURNS,
    )
    learning_turn_use_case = providers.Factory(
        LearningTurnUseCase,
        session_repository=session_repository,
        turn_repository=turn_repository,
        badge_awarder=badge_use_case,
        progress_cache=progress_cache,
    )
    session_progress_use_case = providers.Factory(
        SessionProgressUseCase,
        session_repository=session_repository,
        turn_repository=turn_repository,
        badge_reader=badge_use_case,
        progress_cache=progress_cache,
        recent_badge_window_minutes=settings.provided.RECENT_BADGE_WINDOW_MINUTES,
    )

    # Progress module
    progress_use_case = providers.Factory(
        ProgressUseCase,
        session_repository=session_repository,
        turn_repository=turn_repository,
        badge_repository=badge_repository,
        progress_cache=progress_cache,
    )


container = Container()
