import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from triage_service import config
from triage_service.dataset import summarize_dataset
from triage_service.errors import ChatValidationError
from triage_service.service import PredictionResult


NO_DATASET_REPLY = (
    "No dataset loaded yet. Please upload a CSV first. "
    "The CSV must have Summary and/or Description columns."
)
HELP_REPLY = (
    "You can ask: \n"
    '• "Why 5" to explain predictions for row 5\n'
    '• "Priority distribution" to see counts\n'
    '• "Average" for averages\n'
    '• "Top risky" to see highest priority rows'
)
FALLBACK_REPLY = (
    "I can help with distribution, averages, and explaining rows. "
    'Try: "Why 1" or "Priority distribution".'
)

MIN_MESSAGE_LENGTH = 2

PRIORITY_RANK = {"Critical": 4, "High": 3, "Medium": 2, "Low": 1}

WHY_ROW_RE = re.compile(r"why\s+(?:row|record|id)?\s*(\d+)")
DISTRIBUTION_RE = re.compile(r"distribution|count|how many|breakdown|summary of priority")
HELP_RE = re.compile(r"help|what can you do|commands|options")
TOP_RISKY_RE = re.compile(r"top risky|highest priority|critical")
AVERAGE_RE = re.compile(r"average|avg")

Rows = Sequence[PredictionResult]


@dataclass(frozen=True)
class Intent:
    name: str
    matches: Callable[[str, Rows], bool]
    reply: Callable[[str, Rows], str]


def explain_prediction(row: PredictionResult) -> str:
    return (
        f"Row {row.row_index}: Priority {row.priority} "
        f"(confidence {row.confidence}). {row.rationale}"
    )


def _requested_row(msg: str, rows: Rows) -> Optional[PredictionResult]:
    m = WHY_ROW_RE.search(msg)
    if not m:
        return None
    n = int(m.group(1))
    if 1 <= n <= len(rows):
        return rows[n - 1]
    # out of range: let later intents answer
    return None


def _distribution(msg: str, rows: Rows) -> str:
    summary = summarize_dataset(rows)
    counts = ", ".join(f"{k}: {v}" for k, v in summary.priority_counts.items())
    return "\n".join([
        f"Priority counts → {counts}",
        f"Average story points: {summary.avg_story_points:.2f}",
        f"Average hours: {summary.avg_hours:.1f}",
    ])


def _top_risky(msg: str, rows: Rows) -> str:
    ranked = sorted(
        rows,
        key=lambda r: (PRIORITY_RANK.get(r.priority, 0), r.confidence),
        reverse=True,
    )
    return "\n".join(
        f"Row {r.row_index}: {r.priority} (SP {r.story_points}, ~{r.estimate_hours}h)"
        for r in ranked[:config.TOP_RISKY_LIMIT]
    )


def _averages(msg: str, rows: Rows) -> str:
    summary = summarize_dataset(rows)
    return (
        f"Average story points: {summary.avg_story_points:.2f} | "
        f"Average hours: {summary.avg_hours:.1f}"
    )


def _pattern(regex: re.Pattern) -> Callable[[str, Rows], bool]:
    return lambda msg, rows: regex.search(msg) is not None


# Evaluated in order, first match wins.
INTENTS: List[Intent] = [
    Intent(
        "explain_row",
        lambda msg, rows: _requested_row(msg, rows) is not None,
        lambda msg, rows: explain_prediction(_requested_row(msg, rows)),
    ),
    Intent("distribution", _pattern(DISTRIBUTION_RE), _distribution),
    Intent("help", _pattern(HELP_RE), lambda msg, rows: HELP_REPLY),
    Intent("top_risky", _pattern(TOP_RISKY_RE), _top_risky),
    Intent("average", _pattern(AVERAGE_RE), _averages),
]


def validate_message(message: Optional[str]) -> str:
    if not isinstance(message, str) or len(message.strip()) < MIN_MESSAGE_LENGTH:
        raise ChatValidationError("Message is required.")
    return message


class ChatIntentResolver:
    """Answers questions about the current prediction batch."""

    def __init__(self, intents: Sequence[Intent] = tuple(INTENTS)):
        self.intents = tuple(intents)

    def match(self, message: str, rows: Rows) -> Optional[Intent]:
        msg = message.lower()
        for intent in self.intents:
            if intent.matches(msg, rows):
                return intent
        return None

    def reply(self, message: Optional[str], rows: Rows) -> str:
        message = validate_message(message)
        if not rows:
            return NO_DATASET_REPLY

        intent = self.match(message, rows)
        if intent is None:
            return FALLBACK_REPLY
        return intent.reply(message.lower(), rows)
