import re
from typing import List

RATIONALE_CUES = (
    (re.compile(r"outage|down|unreachable"), "service outage"),
    (re.compile(r"security|breach|encryption"), "security risk"),
    (re.compile(r"payment|checkout"), "revenue impact"),
    (re.compile(r"typo|copy|color|css"), "cosmetic"),
    (re.compile(r"migration|schema|api|integration"), "system integration"),
)

NO_CUES = "general classification"


def find_cues(raw_text: str) -> List[str]:
    lower = (raw_text or "").lower()
    return [label for pattern, label in RATIONALE_CUES if pattern.search(lower)]


def build_rationale(priority: str, story_points: int, hours: int, raw_text: str) -> str:
    cues = ", ".join(find_cues(raw_text)) or NO_CUES
    return (
        f"Priority {priority} based on cues: {cues}. "
        f"Story Points ~{story_points}, Est ~{hours}h."
    )
