"""Tests for the static badge catalog."""

import pytest

from chatterly.domain.achievements.catalog import BADGE_DEFINITIONS, BadgeCatalog
from chatterly.domain.achievements.entities import BadgeCriteria, BadgeDefinition


class TestBadgeCatalog:
    def test_catalog_holds_all_definitions(self) -> None:
        catalog = BadgeCatalog()
        assert len(catalog) == 20
        assert list(catalog) == list(BADGE_DEFINITIONS)

    def test_lookup_by_id(self) -> None:
        catalog = BadgeCatalog()
        badge = catalog.get("first_session")

        assert badge is not None
        assert badge.criteria.kind == "session_count"
        assert badge.criteria.threshold == 1
        assert "first_session" in catalog
        assert catalog.get("no_such_badge") is None

    def test_duplicate_ids_are_rejected(self) -> None:
        badge = BADGE_DEFINITIONS[0]
        with pytest.raises(ValueError):
            BadgeCatalog([badge, badge])

    def test_filters_by_category_and_rarity(self) -> None:
        catalog = BadgeCatalog()
        assert {b.id for b in catalog.by_category("streak")} == {
            "three_day_streak",
            "7_day_streak",
            "month_master",
            "streak_legend",
        }
        assert all(b.rarity == "legendary" for b in catalog.by_rarity("legendary"))

    def test_criteria_conditions_are_read_only(self) -> None:
        criteria = BadgeCriteria(kind="special", conditions={"type": "multi_language"})
        with pytest.raises(TypeError):
            criteria.conditions["type"] = "other"  # type: ignore[index]

    def test_unknown_definition_fallback(self) -> None:
        badge = BadgeDefinition.unknown("retired_badge")

        assert badge.id == "retired_badge"
        assert badge.name == "Unknown Badge"
        assert badge.criteria.to_dict() == {"type": "special"}
