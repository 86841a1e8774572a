"""
The static badge catalog.
"""

from collections.abc import Iterable, Iterator

from chatterly.domain.achievements.entities.badge_definition import (
    BadgeCategory,
    BadgeCriteria,
    BadgeDefinition,
    BadgeRarity,
)

BADGE_DEFINITIONS: tuple[BadgeDefinition, ...] = (
    # Milestone badges
    BadgeDefinition(
        id="first_session",
        name="First Steps",
        description="Complete your first learning session",
        image_url="/badges/first-steps.png",
        category="milestone",
        rarity="common",
        criteria=BadgeCriteria(kind="session_count", threshold=1),
    ),
    BadgeDefinition(
        id="getting_started",
        name="Getting Started",
        description="Complete 5 learning sessions",
        image_url="/badges/getting-started.png",
        category="milestone",
        rarity="common",
        criteria=BadgeCriteria(kind="session_count", threshold=5),
    ),
    BadgeDefinition(
        id="committed_learner",
        name="Committed Learner",
        description="Complete 25 learning sessions",
        image_url="/badges/committed-learner.png",
        category="milestone",
        rarity="rare",
        criteria=BadgeCriteria(kind="session_count", threshold=25),
    ),
    BadgeDefinition(
        id="century_club",
        name="Century Club",
        description="Complete 100 learning sessions",
        image_url="/badges/century-club.png",
        category="milestone",
        rarity="epic",
        criteria=BadgeCriteria(kind="session_count", threshold=100),
    ),
    BadgeDefinition(
        id="legend",
        name="Learning Legend",
        description="Complete 500 learning sessions",
        image_url="/badges/legend.png",
        category="milestone",
        rarity="legendary",
        criteria=BadgeCriteria(kind="session_count", threshold=500),
    ),
    # Streak badges
    BadgeDefinition(
        id="three_day_streak",
        name="Consistency",
        description="Practice for 3 consecutive days",
        image_url="/badges/consistency.png",
        category="streak",
        rarity="common",
        criteria=BadgeCriteria(kind="streak_days", threshold=3),
    ),
    BadgeDefinition(
        id="7_day_streak",
        name="Week Warrior",
        description="Practice for 7 consecutive days",
        image_url="/badges/week-warrior.png",
        category="streak",
        rarity="rare",
        criteria=BadgeCriteria(kind="streak_days", threshold=7),
    ),
    BadgeDefinition(
        id="month_master",
        name="Month Master",
        description="Practice for 30 consecutive days",
        image_url="/badges/month-master.png",
        category="streak",
        rarity="epic",
        criteria=BadgeCriteria(kind="streak_days", threshold=30),
    ),
    BadgeDefinition(
        id="streak_legend",
        name="Streak Legend",
        description="Practice for 100 consecutive days",
        image_url="/badges/streak-legend.png",
        category="streak",
        rarity="legendary",
        criteria=BadgeCriteria(kind="streak_days", threshold=100),
    ),
    # Performance badges
    BadgeDefinition(
        id="perfect_pronunciation",
        name="Perfect Pronunciation",
        description="Achieve 90%+ pronunciation score in a session",
        image_url="/badges/perfect-pronunciation.png",
        category="performance",
        rarity="rare",
        criteria=BadgeCriteria(kind="pronunciation_score", threshold=90),
    ),
    BadgeDefinition(
        id="pronunciation_master",
        name="Pronunciation Master",
        description="Maintain 90%+ pronunciation score for 10 sessions",
        image_url="/badges/pronunciation-master.png",
        category="performance",
        rarity="epic",
        criteria=BadgeCriteria(
            kind="performance_consistency",
            threshold=90,
            conditions={"metric": "pronunciation", "sessions": 10},
        ),
    ),
    BadgeDefinition(
        id="grammar_guru",
        name="Grammar Guru",
        description="Achieve 95%+ grammar score in a session",
        image_url="/badges/grammar-guru.png",
        category="performance",
        rarity="rare",
        criteria=BadgeCriteria(kind="grammar_score", threshold=95),
    ),
    BadgeDefinition(
        id="perfectionist",
        name="Perfectionist",
        description="Maintain 95%+ overall score for 10 sessions",
        image_url="/badges/perfectionist.png",
        category="performance",
        rarity="legendary",
        criteria=BadgeCriteria(
            kind="performance_consistency",
            threshold=95,
            conditions={"metric": "overall", "sessions": 10},
        ),
    ),
    BadgeDefinition(
        id="sentences_mastered_50",
        name="Sentence Master",
        description="Master 50 sentences with high accuracy",
        image_url="/badges/sentence-master.png",
        category="performance",
        rarity="epic",
        criteria=BadgeCriteria(
            kind="special",
            conditions={"type": "sentences_mastered", "count": 50, "accuracy_threshold": 80},
        ),
    ),
    # Special badges
    BadgeDefinition(
        id="early_bird",
        name="Early Bird",
        description="Complete 5 sessions before 9 AM",
        image_url="/badges/early-bird.png",
        category="special",
        rarity="rare",
        criteria=BadgeCriteria(
            kind="special",
            conditions={"type": "time_based", "time_before": "09:00", "count": 5},
        ),
    ),
    BadgeDefinition(
        id="night_owl",
        name="Night Owl",
        description="Complete 5 sessions after 9 PM",
        image_url="/badges/night-owl.png",
        category="special",
        rarity="rare",
        criteria=BadgeCriteria(
            kind="special",
            conditions={"type": "time_based", "time_after": "21:00", "count": 5},
        ),
    ),
    BadgeDefinition(
        id="polyglot",
        name="Polyglot",
        description="Practice 3 or more different languages",
        image_url="/badges/polyglot.png",
        category="special",
        rarity="epic",
        criteria=BadgeCriteria(kind="special", conditions={"type": "multi_language", "count": 3}),
    ),
    BadgeDefinition(
        id="quick_learner",
        name="Quick Learner",
        description="Complete 5 sessions in a single day",
        image_url="/badges/quick-learner.png",
        category="special",
        rarity="rare",
        criteria=BadgeCriteria(kind="special", conditions={"type": "daily_sessions", "count": 5}),
    ),
    BadgeDefinition(
        id="weekend_warrior",
        name="Weekend Warrior",
        description="Complete sessions on 10 different weekends",
        image_url="/badges/weekend-warrior.png",
        category="special",
        rarity="epic",
        criteria=BadgeCriteria(
            kind="special", conditions={"type": "weekend_sessions", "count": 10}
        ),
    ),
    BadgeDefinition(
        id="marathon_learner",
        name="Marathon Learner",
        description="Complete a session lasting over 30 minutes",
        image_url="/badges/marathon-learner.png",
        category="special",
        rarity="rare",
        criteria=BadgeCriteria(
            kind="special", conditions={"type": "session_duration", "minutes": 30}
        ),
    ),
)


class BadgeCatalog:
    """Immutable, id-indexed collection of badge definitions."""

    def __init__(self, definitions: Iterable[BadgeDefinition] = BADGE_DEFINITIONS) -> None:
        self._definitions = tuple(definitions)
        self._by_id = {definition.id: definition for definition in self._definitions}
        if len(self._by_id) != len(self._definitions):
            raise ValueError("Badge ids must be unique within a catalog")

    def __iter__(self) -> Iterator[BadgeDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, badge_id: object) -> bool:
        return badge_id in self._by_id

    def get(self, badge_id: str) -> BadgeDefinition | None:
        return self._by_id.get(badge_id)

    def by_category(self, category: BadgeCategory) -> list[BadgeDefinition]:
        return [d for d in self._definitions if d.category == category]

    def by_rarity(self, rarity: BadgeRarity) -> list[BadgeDefinition]:
        return [d for d in self._definitions if d.rarity == rarity]

    def ids(self) -> list[str]:
        return [d.id for d in self._definitions]
