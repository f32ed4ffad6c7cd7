"""Tests for the per-record prediction pipeline."""

import pytest
from hypothesis import given, settings, strategies as st

from triage_service.classifier import LabelScore, PriorityClassifier
from triage_service.estimation import STORY_POINT_SCALE
from triage_service.service import EMPTY_TEXT_RATIONALE, PredictionService, TextRecord

from conftest import StubClassifier


class TestEmptyInput:

    @pytest.mark.parametrize("record", [
        TextRecord(summary="", description=""),
        TextRecord(summary="   ", description="\n"),
        TextRecord(),
    ])
    def test_conservative_defaults(self, service, record):
        result = service.predict(record)
        assert result.priority == "Low"
        assert result.story_points == 1
        assert result.estimate_hours == 4
        assert result.confidence == 0.4
        assert result.rationale == EMPTY_TEXT_RATIONALE

    def test_classifier_not_invoked(self):
        stub = StubClassifier([LabelScore("High", 0.8), LabelScore("Low", 0.2)])
        PredictionService(PriorityClassifier(stub)).predict(TextRecord())
        assert stub.calls == []


class TestScenarios:

    def test_payment_failure_is_critical(self, service):
        record = TextRecord(summary="Payment gateway failing checkout blocked for all customers")
        result = service.predict(record)
        assert result.priority == "Critical"
        assert result.confidence >= 0.85
        assert "revenue impact" in result.rationale

    def test_minor_css_fix_is_small(self, service):
        result = service.predict(TextRecord(summary="Minor CSS fix needed for misaligned button"))
        assert result.story_points <= 3
        assert "cosmetic" in result.rationale

    def test_punctuation_only_uses_classifier_default(self, service):
        result = service.predict(TextRecord(summary="...", description="!!"))
        assert result.priority == "Medium"
        assert result.confidence == 0.6
        assert result.rationale == (
            "Priority Medium based on cues: general classification. Story Points ~1, Est ~4h."
        )

    def test_summary_and_description_combined(self, service):
        result = service.predict(TextRecord(summary="Login page", description="service is down"))
        assert result.priority == "Critical"
        assert "service outage" in result.rationale
        assert result.summary == "Login page"
        assert result.description == "service is down"

    def test_stub_classifier_drives_priority(self):
        stub = StubClassifier([LabelScore("High", 0.8), LabelScore("Low", 0.2)])
        result = PredictionService(PriorityClassifier(stub)).predict(TextRecord(summary="Add tooltip"))
        assert result.priority == "High"
        assert result.confidence == 0.8
        assert stub.calls == ["add tooltip"]


class TestBatch:

    def test_rows_numbered_in_input_order(self, service):
        records = [
            TextRecord(summary="Fix typo"),
            TextRecord(),
            TextRecord(description="Security breach in admin panel"),
        ]
        results = service.predict_batch(records)
        assert [r.row_index for r in results] == [1, 2, 3]
        assert results[1].priority == "Low"
        assert results[2].priority == "Critical"

    def test_empty_batch(self, service):
        assert service.predict_batch([]) == ()


@settings(max_examples=100, deadline=None)
@given(summary=st.text(max_size=150), description=st.text(max_size=150))
def test_prediction_bounds_and_idempotence(service, summary, description):
    record = TextRecord(summary=summary, description=description)
    first = service.predict(record)
    assert first.priority in ("Critical", "High", "Medium", "Low")
    assert first.story_points in STORY_POINT_SCALE
    assert first.estimate_hours >= 1
    assert 0.4 <= first.confidence <= 0.99
    assert service.predict(record) == first
