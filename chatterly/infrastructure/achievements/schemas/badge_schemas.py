"""Pydantic schemas for badge API responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chatterly.domain.achievements.entities.badge_definition import BadgeCategory, BadgeRarity


class BadgeCriteria(BaseModel):
    """Schema for the criteria of a badge definition."""

    type: str = Field(..., description="Criteria kind, e.g. session_count or special")
    threshold: float | None = None
    timeframe: str | None = None
    conditions: dict[str, Any] | None = None


class BadgeDefinition(BaseModel):
    """Schema for a catalog badge."""

    id: str
    name: str
    description: str
    image_url: str
    category: BadgeCategory
    rarity: BadgeRarity
    criteria: BadgeCriteria


class EarnedBadge(BaseModel):
    """Schema for a badge the user holds, with its catalog definition."""

    id: int
    badge_type: str
    awarded_at: datetime | None
    badge_data: dict[str, Any] | None = Field(None, description="Context captured at award time")
    definition: BadgeDefinition


class BadgeProgress(BaseModel):
    """Schema for progress toward a badge not earned yet."""

    badge_id: str
    current_progress: int
    required_progress: int
    percentage: int = Field(..., ge=0, le=100)


class BadgesResponse(BaseModel):
    """Schema for the badges overview response."""

    earned_badges: list[EarnedBadge] = Field(..., description="Earned badges, newest first")
    available_badges: list[BadgeDefinition] = Field(..., description="Badges not earned yet")
    progress: list[BadgeProgress] = Field(..., description="Progress toward available badges")
