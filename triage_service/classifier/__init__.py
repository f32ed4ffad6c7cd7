from triage_service.classifier.predictor import (
    DEFAULT_CONFIDENCE,
    DEFAULT_PRIORITY,
    Classification,
    LabelClassifier,
    LabelScore,
    PriorityClassifier,
    SeedNaiveBayesClassifier,
)

__all__ = [
    "DEFAULT_CONFIDENCE",
    "DEFAULT_PRIORITY",
    "Classification",
    "LabelClassifier",
    "LabelScore",
    "PriorityClassifier",
    "SeedNaiveBayesClassifier",
]
