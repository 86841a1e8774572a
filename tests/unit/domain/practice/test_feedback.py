"""Tests for feedback payload parsing."""

import math

import pytest

from chatterly.domain.practice.feedback import Feedback, extract_overall_score


class TestExtractOverallScore:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"overall_score": 85}, 85.0),
            ({"overall_score": 72.5, "words": []}, 72.5),
            ({"overall_score": 0}, 0.0),
        ],
    )
    def test_numeric_scores_are_read(self, payload: object, expected: float) -> None:
        assert extract_overall_score(payload) == expected

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "85",
            [85],
            {},
            {"score": 85},
            {"overall_score": "85"},
            {"overall_score": True},
            {"overall_score": None},
            {"overall_score": math.nan},
            {"overall_score": math.inf},
            {"overall_score": -math.inf},
        ],
    )
    def test_unusable_payloads_yield_none(self, payload: object) -> None:
        assert extract_overall_score(payload) is None


class TestFeedback:
    def test_from_payload_none_returns_none(self) -> None:
        assert Feedback.from_payload(None) is None

    def test_from_payload_keeps_payload_untouched(self) -> None:
        payload = {"overall_score": 90, "phonemes": [{"p": "a", "score": 88}]}
        feedback = Feedback.from_payload(payload)

        assert feedback is not None
        assert feedback.payload == payload
        assert feedback.overall_score == 90.0
        assert feedback.has_score

    def test_payload_without_score_has_no_score(self) -> None:
        feedback = Feedback.from_payload({"comment": "good"})

        assert feedback is not None
        assert feedback.overall_score is None
        assert not feedback.has_score
