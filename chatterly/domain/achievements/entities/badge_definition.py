"""
Badge definitions: immutable catalog entries loaded at process start.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

BadgeCategory = Literal["milestone", "streak", "performance", "special"]
BadgeRarity = Literal["common", "rare", "epic", "legendary"]

# Kinds understood by the evaluators. Criteria with any other kind are still
# representable; evaluators treat them as unrecognized.
CriteriaKind = Literal[
    "session_count",
    "streak_days",
    "pronunciation_score",
    "grammar_score",
    "performance_consistency",
    "special",
]


def _freeze(conditions: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(conditions or {}))


@dataclass(frozen=True)
class BadgeCriteria:
    """Typed criteria descriptor: kind, optional threshold and structured conditions."""

    kind: str
    threshold: float | None = None
    timeframe: str | None = None
    conditions: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", _freeze(self.conditions))

    def condition(self, key: str, default: Any = None) -> Any:
        return self.conditions.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind}
        if self.threshold is not None:
            data["threshold"] = self.threshold
        if self.timeframe is not None:
            data["timeframe"] = self.timeframe
        if self.conditions:
            data["conditions"] = dict(self.conditions)
        return data


@dataclass(frozen=True)
class BadgeDefinition:
    """A named achievement with static criteria."""

    id: str
    name: str
    description: str
    image_url: str
    category: BadgeCategory
    rarity: BadgeRarity
    criteria: BadgeCriteria

    @classmethod
    def unknown(cls, badge_type: str) -> "BadgeDefinition":
        """Placeholder for earned badges whose type is no longer in the catalog."""
        return cls(
            id=badge_type,
            name="Unknown Badge",
            description="Badge definition not found",
            image_url="/badges/unknown.png",
            category="special",
            rarity="common",
            criteria=BadgeCriteria(kind="special"),
        )
