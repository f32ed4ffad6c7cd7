import math
import re
from typing import Dict, Tuple

from triage_service.text import normalize_text


STORY_POINT_SCALE = (1, 2, 3, 5, 8, 13)
STORY_POINT_THRESHOLDS = (0.15, 0.30, 0.50, 0.80, 1.10, 1.50)

MAX_COMPLEXITY = 1.5
LENGTH_SATURATION = 120

# (keywords, weight added per keyword found in the normalized text)
COMPLEXITY_KEYWORDS: Dict[str, Tuple[Tuple[str, ...], float]] = {
    "tiny": (("typo", "copy", "text", "docs", "readme", "color", "padding", "icon"), -0.20),
    "small": (("validation", "minor", "ui", "tooltip", "css", "logging", "small", "refactor"), 0.05),
    "medium": (("api", "schema", "cache", "queue", "oauth", "retry", "pagination", "migration", "feature"), 0.15),
    "large": (
        ("payment", "encryption", "security", "outage", "deadlock", "data loss",
         "race condition", "recovery", "multi-tenant", "compliance"),
        0.35,
    ),
}

BASE_HOURS = {1: 4, 2: 6, 3: 8, 5: 16, 8: 32, 13: 56}
FALLBACK_HOURS = 8

HOUR_MULTIPLIERS = (
    (re.compile(r"spike|investigate|unknown|legacy|undocumented"), 1.30),
    (re.compile(r"well-defined|simple|trivial|straightforward"), 0.80),
    (re.compile(r"cross-team|multiple services|coordination|dependency"), 1.25),
)


def score_complexity(text: str) -> float:
    normalized = normalize_text(text)
    token_count = max(1, len(normalized.split(" ")))
    score = min(1.0, token_count / LENGTH_SATURATION)

    for keywords, weight in COMPLEXITY_KEYWORDS.values():
        for keyword in keywords:
            if keyword in normalized:
                score += weight

    return max(0.0, min(MAX_COMPLEXITY, score))


def to_story_points(score: float) -> int:
    for threshold, points in zip(STORY_POINT_THRESHOLDS, STORY_POINT_SCALE):
        if score <= threshold:
            return points
    return STORY_POINT_SCALE[-1]


def estimate_hours(story_points: int, text: str) -> int:
    hours = float(BASE_HOURS.get(story_points, FALLBACK_HOURS))
    normalized = normalize_text(text)
    for pattern, factor in HOUR_MULTIPLIERS:
        if pattern.search(normalized):
            hours *= factor
    # half away from zero, not banker's rounding
    return max(1, int(math.floor(hours + 0.5)))
