from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Opaque user identifier supplied by the identity provider."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("UserId cannot be empty")


@dataclass(frozen=True)
class SessionId(EntityId):
    """Strongly-typed practice session identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("SessionId must be non-negative")


@dataclass(frozen=True)
class TurnId(EntityId):
    """Strongly-typed learning turn identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("TurnId must be non-negative")


@dataclass(frozen=True)
class EarnedBadgeId(EntityId):
    """Strongly-typed earned badge row identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("EarnedBadgeId must be non-negative")
