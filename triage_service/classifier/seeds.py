from dataclasses import dataclass
from typing import Dict, Tuple

PRIORITY_LABELS = ("Critical", "High", "Medium", "Low")


@dataclass(frozen=True)
class SeedExample:
    label: str
    phrase: str


_SEED_PHRASES: Dict[str, Tuple[str, ...]] = {
    "Critical": (
        "production outage critical sev1 service down multiple customers cannot login 500 error",
        "security breach data leak pii exposed urgent incident",
        "payment gateway failing checkout blocked revenue impact",
        "data loss corruption cannot recover backups failing",
        "deadlock crash on startup app unusable after update",
    ),
    "High": (
        "performance degradation slow response timeout frequent errors spike",
        "api failing intermittently flaky retries required",
        "priority customer blocked cannot complete workflow",
        "migration deadline approaching key dependency broken",
        "compliance issue needs fix before release",
    ),
    "Medium": (
        "feature enhancement add filter sorting column",
        "ui bug misaligned button typography issue minor",
        "edge case validation error specific inputs",
        "refactor module cleanup improve maintainability",
        "add logging metrics monitoring",
    ),
    "Low": (
        "cosmetic request color change microcopy tweak",
        "documentation update readme faq add examples",
        "typo fix grammar correction",
        "small improvement non urgent backlog",
        "developer tooling dx polish",
    ),
}

SEED_CORPUS: Tuple[SeedExample, ...] = tuple(
    SeedExample(label=label, phrase=phrase)
    for label in PRIORITY_LABELS
    for phrase in _SEED_PHRASES[label]
)
