import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from triage_service.classifier import PriorityClassifier
from triage_service.estimation import estimate_hours, score_complexity, to_story_points
from triage_service.rationale import build_rationale
from triage_service.text import normalize_text


logger = logging.getLogger("triage")

EMPTY_TEXT_RATIONALE = "No text provided. Falling back to conservative defaults."


@dataclass(frozen=True)
class TextRecord:
    summary: str = ""
    description: str = ""

    @property
    def text(self) -> str:
        return f"{self.summary or ''}\n{self.description or ''}".strip()


@dataclass(frozen=True)
class PredictionResult:
    row_index: int
    priority: str
    story_points: int
    estimate_hours: int
    confidence: float
    rationale: str
    summary: str = ""
    description: str = ""


class PredictionService:
    """
    Runs one record through classification, effort scoring and rationale.

    The classifier is shared and read-only, so the service holds no state of
    its own and repeated calls on the same record give the same result.
    """

    def __init__(self, classifier: PriorityClassifier):
        self.classifier = classifier

    def predict(self, record: TextRecord, row_index: int = 1) -> PredictionResult:
        text = record.text
        if not text:
            return PredictionResult(
                row_index=row_index,
                priority="Low",
                story_points=1,
                estimate_hours=4,
                confidence=0.4,
                rationale=EMPTY_TEXT_RATIONALE,
                summary=record.summary,
                description=record.description,
            )

        classification = self.classifier.classify(normalize_text(text), text)

        story_points = to_story_points(score_complexity(text))
        hours = estimate_hours(story_points, text)
        rationale = build_rationale(classification.priority, story_points, hours, text)

        return PredictionResult(
            row_index=row_index,
            priority=classification.priority,
            story_points=story_points,
            estimate_hours=hours,
            confidence=classification.confidence,
            rationale=rationale,
            summary=record.summary,
            description=record.description,
        )

    def predict_batch(self, records: Iterable[TextRecord]) -> Tuple[PredictionResult, ...]:
        results = tuple(
            self.predict(record, row_index=i)
            for i, record in enumerate(records, start=1)
        )
        logger.info("Predicted %d rows", len(results))
        return results

