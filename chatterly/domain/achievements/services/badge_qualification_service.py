"""
Decide which catalog badges a user's full history qualifies for.

Awarding itself is done by the application layer, which inserts only the
badges the user does not hold yet.
"""

from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from chatterly.domain.achievements.catalog import BadgeCatalog
from chatterly.domain.achievements.entities.badge_definition import BadgeCriteria
from chatterly.domain.common.rounding import round_half_up
from chatterly.domain.progress.services.streak_calculator import longest_calendar_streak

if TYPE_CHECKING:
    from chatterly.domain.practice.entities.learning_turn import LearningTurn
    from chatterly.domain.practice.entities.practice_session import PracticeSession

SATURDAY, SUNDAY = 5, 6

BadgeData = dict[str, Any]


@dataclass(frozen=True)
class BadgeAward:
    badge_type: str
    badge_data: BadgeData = field(default_factory=dict)


@dataclass(frozen=True)
class _History:
    sessions: Sequence["PracticeSession"]
    turns: Sequence["LearningTurn"]
    now: datetime


def _meets(score: float | None, threshold: float) -> bool:
    return score is not None and score >= threshold


class BadgeQualificationService:
    """Stateless evaluation of every catalog badge against a user's history."""

    def __init__(self, catalog: BadgeCatalog, consistency_window_days: int = 30) -> None:
        self.catalog = catalog
        self.consistency_window = timedelta(days=consistency_window_days)
        self._kind_rules: dict[str, Callable[[BadgeCriteria, _History], BadgeData | None]] = {
            "session_count": self._session_count,
            "streak_days": self._streak_days,
            "pronunciation_score": self._pronunciation_score,
            "grammar_score": self._grammar_score,
            "performance_consistency": self._performance_consistency,
            "special": self._special,
        }
        self._special_rules: dict[str, Callable[[BadgeCriteria, _History], BadgeData | None]] = {
            "time_based": self._time_based,
            "multi_language": self._multi_language,
            "daily_sessions": self._daily_sessions,
            "weekend_sessions": self._weekend_sessions,
            "session_duration": self._session_duration,
            "sentences_mastered": self._sentences_mastered,
        }

    def qualify(
        self,
        sessions: Sequence["PracticeSession"],
        turns: Sequence["LearningTurn"],
        now: datetime,
    ) -> list[BadgeAward]:
        """
        Return an award for every catalog badge the history satisfies.

        Args:
            sessions: All of the user's sessions
            turns: All turns of those sessions, in chronological order
            now: Reference time for windowed criteria

        Returns:
            Awards in catalog order, already-earned badges included
        """
        history = _History(sessions=sessions, turns=turns, now=now)
        awards: list[BadgeAward] = []
        for badge in self.catalog:
            rule = self._kind_rules.get(badge.criteria.kind)
            if rule is None:
                continue
            badge_data = rule(badge.criteria, history)
            if badge_data is not None:
                awards.append(BadgeAward(badge_type=badge.id, badge_data=badge_data))
        return awards

    @staticmethod
    def _count(criteria: BadgeCriteria) -> int:
        return int(criteria.condition("count", 1))

    def _session_count(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        count = len(history.sessions)
        if count >= (criteria.threshold or 1):
            return {"session_count": count}
        return None

    def _streak_days(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        streak = longest_calendar_streak(
            s.started_at for s in history.sessions if s.started_at is not None
        )
        if streak and streak >= (criteria.threshold or 1):
            return {"streak_days": streak}
        return None

    def _pronunciation_score(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        for turn in history.turns:
            if _meets(turn.pronunciation_score, criteria.threshold or 0):
                return {"turn_id": turn.id.value, "score": turn.pronunciation_score}
        return None

    def _grammar_score(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        for turn in history.turns:
            if _meets(turn.grammar_score, criteria.threshold or 0):
                return {"turn_id": turn.id.value, "score": turn.grammar_score}
        return None

    def _performance_consistency(
        self, criteria: BadgeCriteria, history: _History
    ) -> BadgeData | None:
        threshold = criteria.threshold or 0
        metric = criteria.condition("metric", "overall")
        window_start = history.now - self.consistency_window
        recent_sessions = {
            s.id
            for s in history.sessions
            if s.started_at is not None and s.started_at >= window_start
        }

        def high_scoring(turn: "LearningTurn") -> bool:
            if metric == "pronunciation":
                return _meets(turn.pronunciation_score, threshold)
            if metric == "grammar":
                return _meets(turn.grammar_score, threshold)
            return _meets(turn.pronunciation_score, threshold) and _meets(
                turn.grammar_score, threshold
            )

        consistent = {
            turn.session_id
            for turn in history.turns
            if turn.completed and turn.session_id in recent_sessions and high_scoring(turn)
        }
        if len(consistent) >= int(criteria.condition("sessions", 1)):
            return {"consistent_sessions": len(consistent)}
        return None

    def _special(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        rule = self._special_rules.get(criteria.condition("type", ""))
        if rule is None:
            return None
        return rule(criteria, history)

    def _time_based(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        started = [s.started_at for s in history.sessions if s.started_at is not None]
        if before := criteria.condition("time_before"):
            cutoff = time.fromisoformat(before)
            count = sum(1 for ts in started if ts.time() < cutoff)
            key = "morning_sessions"
        elif after := criteria.condition("time_after"):
            cutoff = time.fromisoformat(after)
            count = sum(1 for ts in started if ts.time() >= cutoff)
            key = "evening_sessions"
        else:
            return None
        if count >= self._count(criteria):
            return {key: count}
        return None

    def _multi_language(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        languages = {s.target_language for s in history.sessions if s.target_language}
        if len(languages) >= self._count(criteria):
            return {"languages_count": len(languages)}
        return None

    def _daily_sessions(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        per_day = Counter(s.started_at.date() for s in history.sessions if s.started_at)
        if not per_day:
            return None
        day, count = max(per_day.items(), key=lambda item: (item[1], item[0]))
        if count >= self._count(criteria):
            return {"daily_sessions": count, "date": day.isoformat()}
        return None

    def _weekend_sessions(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        weekend_days = {
            s.started_at.date()
            for s in history.sessions
            if s.started_at is not None and s.started_at.weekday() in (SATURDAY, SUNDAY)
        }
        if len(weekend_days) >= self._count(criteria):
            return {"weekend_sessions": len(weekend_days)}
        return None

    def _session_duration(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        required_minutes = criteria.condition("minutes", 0)
        for session in history.sessions:
            if session.started_at is None or session.ended_at is None:
                continue
            minutes = (session.ended_at - session.started_at).total_seconds() / 60
            if minutes >= required_minutes:
                return {"duration_minutes": round_half_up(minutes, 1)}
        return None

    def _sentences_mastered(self, criteria: BadgeCriteria, history: _History) -> BadgeData | None:
        accuracy = criteria.condition("accuracy_threshold", 0)
        mastered = sum(
            1
            for turn in history.turns
            if turn.completed
            and _meets(turn.pronunciation_score, accuracy)
            and _meets(turn.grammar_score, accuracy)
        )
        if mastered >= self._count(criteria):
            return {"sentences_count": mastered}
        return None
