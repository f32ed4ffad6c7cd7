import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB

from triage_service import config
from triage_service.classifier.seeds import SEED_CORPUS, SeedExample
from triage_service.text import normalize_text


logger = logging.getLogger("triage.classifier")

DEFAULT_PRIORITY = "Medium"
DEFAULT_CONFIDENCE = 0.6
MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.99

OVERRIDE_PRIORITY = "Critical"
OVERRIDE_MIN_CONFIDENCE = 0.85

# Checked against the raw lowercased text, not the normalized tokens. Only the
# start is word-bounded so inflections ("breached", "downtime") still match.
EMERGENCY_RE = re.compile(
    r"\b(?:"
    r"sev1|p0|outage|down"
    r"|(?:cannot|can't|unable to) log ?in"
    r"|payment (?:failed|failing|failure|gateway)"
    r"|checkout (?:blocked|failing|failed|broken)"
    r"|data loss|security|breach"
    r")"
)


@dataclass(frozen=True)
class LabelScore:
    label: str
    score: float


@dataclass(frozen=True)
class Classification:
    priority: str
    confidence: float
    overridden: bool = False


class LabelClassifier(Protocol):
    """normalized text -> label scores, highest first.

    Labels without positive mass are left out, so an empty list means the
    text carried nothing the model could use.
    """

    def rank(self, normalized_text: str) -> List[LabelScore]:
        ...


class SeedNaiveBayesClassifier:
    """
    Multinomial Naive Bayes over token counts, trained once from the seed corpus.

    load() fits the vectorizer and the model; after that both are only read.
    """

    def __init__(self, corpus: Sequence[SeedExample] = SEED_CORPUS, alpha: float = 1.0):
        self.corpus = tuple(corpus)
        self.alpha = alpha
        self.vectorizer: Optional[CountVectorizer] = None
        self.model: Optional[MultinomialNB] = None
        self.model_version = config.MODEL_VERSION
        self.debug = config.DEBUG

    def _log(self, msg: str) -> None:
        if self.debug:
            logger.info("[SeedNaiveBayesClassifier] %s", msg)

    def load(self) -> None:
        if self.is_ready():
            return

        texts = [normalize_text(s.phrase) for s in self.corpus]
        labels = [s.label for s in self.corpus]

        vectorizer = CountVectorizer(analyzer=str.split)
        X = vectorizer.fit_transform(texts)
        model = MultinomialNB(alpha=self.alpha)
        model.fit(X, labels)

        self.vectorizer = vectorizer
        self.model = model
        self._log(
            f"Trained on {len(texts)} seed phrases, "
            f"{len(vectorizer.vocabulary_)} tokens, labels={list(model.classes_)}"
        )

    def is_ready(self) -> bool:
        return self.vectorizer is not None and self.model is not None

    def rank(self, normalized_text: str) -> List[LabelScore]:
        if not self.is_ready():
            raise RuntimeError("Seed classifier not trained. Call load() first.")

        if not normalized_text:
            return []

        X = self.vectorizer.transform([normalized_text])
        if X.nnz == 0:
            # no token from the seed vocabulary
            return []

        proba = self.model.predict_proba(X)[0]
        scores = [
            LabelScore(label=str(label), score=float(p))
            for label, p in zip(self.model.classes_, proba)
            if p > 0
        ]
        return sorted(scores, key=lambda s: s.score, reverse=True)


def confidence_from_ranking(ranking: Sequence[LabelScore]) -> Classification:
    if len(ranking) < 2:
        return Classification(DEFAULT_PRIORITY, DEFAULT_CONFIDENCE)

    top, second = ranking[0], ranking[1]
    confidence = top.score / (top.score + second.score)
    confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))
    return Classification(top.label, round(confidence, 2))


def is_emergency(raw_text: str) -> bool:
    return EMERGENCY_RE.search((raw_text or "").lower()) is not None


class PriorityClassifier:
    """Label ranking plus the emergency-keyword override."""

    def __init__(self, model: LabelClassifier):
        self.model = model

    def classify(self, normalized_text: str, raw_text: str) -> Classification:
        try:
            result = confidence_from_ranking(self.model.rank(normalized_text))
        except Exception as e:
            logger.warning("Classification failed, using default priority: %s", e)
            result = Classification(DEFAULT_PRIORITY, DEFAULT_CONFIDENCE)

        if is_emergency(raw_text):
            return Classification(
                OVERRIDE_PRIORITY,
                max(result.confidence, OVERRIDE_MIN_CONFIDENCE),
                overridden=True,
            )
        return result
