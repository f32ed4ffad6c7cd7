from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence, Tuple

from triage_service.service import PredictionResult


Dataset = Tuple[PredictionResult, ...]


@dataclass(frozen=True)
class DatasetSummary:
    priority_counts: Dict[str, int] = field(default_factory=dict)
    avg_story_points: float = 0.0
    avg_hours: float = 0.0


def summarize_dataset(rows: Sequence[PredictionResult]) -> DatasetSummary:
    counts: Dict[str, int] = {}
    for row in rows:
        counts[row.priority] = counts.get(row.priority, 0) + 1

    n = max(1, len(rows))
    return DatasetSummary(
        priority_counts=counts,
        avg_story_points=sum(r.story_points for r in rows) / n,
        avg_hours=sum(r.estimate_hours for r in rows) / n,
    )


class DatasetStore:
    """
    Holds the most recent prediction batch.

    The batch is kept as an immutable tuple and swapped in one assignment,
    so readers get either the previous batch or the new one in full.
    """

    def __init__(self):
        self._rows: Dataset = ()

    def replace(self, rows: Iterable[PredictionResult]) -> Dataset:
        snapshot = tuple(rows)
        self._rows = snapshot
        return snapshot

    def clear(self) -> None:
        self._rows = ()

    def snapshot(self) -> Dataset:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)
