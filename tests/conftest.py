from typing import List

import pytest

from triage_service.classifier import LabelScore, PriorityClassifier, SeedNaiveBayesClassifier
from triage_service.service import PredictionResult, PredictionService


class StubClassifier:
    """Returns a fixed ranking regardless of the text."""

    def __init__(self, ranking: List[LabelScore]):
        self.ranking = ranking
        self.calls = []

    def rank(self, normalized_text: str) -> List[LabelScore]:
        self.calls.append(normalized_text)
        return list(self.ranking)


class FailingClassifier:
    def rank(self, normalized_text: str) -> List[LabelScore]:
        raise ValueError("model exploded")


@pytest.fixture(scope="session")
def seed_model():
    model = SeedNaiveBayesClassifier()
    model.load()
    return model


@pytest.fixture(scope="session")
def service(seed_model):
    return PredictionService(PriorityClassifier(seed_model))


def make_row(row_index, priority, confidence=0.7, story_points=3, hours=8, rationale=None):
    return PredictionResult(
        row_index=row_index,
        priority=priority,
        story_points=story_points,
        estimate_hours=hours,
        confidence=confidence,
        rationale=rationale or f"rationale {row_index}",
    )


@pytest.fixture
def three_rows():
    return (
        make_row(1, "Critical", confidence=0.9, story_points=5, hours=16),
        make_row(2, "Low", confidence=0.7, story_points=1, hours=4),
        make_row(3, "High", confidence=0.8, story_points=3, hours=8),
    )
