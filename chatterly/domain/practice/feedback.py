"""
Feedback value object.

Pronunciation and grammar feedback arrive from speech services as free-form
JSON. The only field the engine interprets is the numeric ``overall_score``;
everything else is carried through untouched.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chatterly.domain.common.value_object import ValueObject


def extract_overall_score(payload: object) -> float | None:
    """
    Pull a usable ``overall_score`` out of an arbitrary payload.

    Never raises. Non-mapping payloads, missing keys, booleans, strings and
    non-finite numbers all yield None.
    """
    if not isinstance(payload, Mapping):
        return None
    score = payload.get("overall_score")
    if isinstance(score, bool) or not isinstance(score, int | float):
        return None
    if not math.isfinite(score):
        return None
    return float(score)


@dataclass(frozen=True, eq=False)
class Feedback(ValueObject):
    """Opaque feedback payload with its optional numeric overall score."""

    payload: Any
    overall_score: float | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Feedback | None":
        """Wrap a raw payload, or return None when there is no payload at all."""
        if payload is None:
            return None
        return cls(payload=payload, overall_score=extract_overall_score(payload))

    @property
    def has_score(self) -> bool:
        return self.overall_score is not None
