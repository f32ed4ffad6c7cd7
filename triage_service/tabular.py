import io
from typing import Dict, List, Optional, Sequence

import pandas as pd

from triage_service.errors import UploadValidationError
from triage_service.service import PredictionResult, TextRecord


SUMMARY_COL = "summary"
DESC_COL = "description"

OUTPUT_COLUMNS = [
    "Row", "Summary", "Description", "Priority",
    "StoryPoints", "EstimateHours", "Confidence", "Rationale",
]


def _find_column(columns: Sequence[str], name: str) -> Optional[str]:
    for col in columns:
        if col.strip().lower() == name:
            return col
    return None


def read_records(data: bytes) -> List[TextRecord]:
    """
    Parses an uploaded CSV into TextRecords.

    Header names are matched case-insensitively; a file needs at least one of
    Summary / Description. Missing cells become empty strings; extra cells
    (e.g. an unquoted comma) are cut off so every data line stays a row.
    """
    try:
        header = pd.read_csv(io.BytesIO(data), nrows=0, encoding="utf-8-sig").columns
        width = len(header)
        df = pd.read_csv(
            io.BytesIO(data),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
            engine="python",
            index_col=False,
            on_bad_lines=lambda fields: fields[:width],
        )
    except pd.errors.EmptyDataError:
        raise UploadValidationError("CSV appears empty or has no data rows.")
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise UploadValidationError(f"Failed to parse CSV: {e}")

    if df.empty:
        raise UploadValidationError("CSV appears empty or has no data rows.")

    summary_col = _find_column(df.columns, SUMMARY_COL)
    desc_col = _find_column(df.columns, DESC_COL)
    if summary_col is None and desc_col is None:
        raise UploadValidationError(
            'CSV must include at least one column: "Summary" or "Description".'
        )

    def cell(row: pd.Series, col: Optional[str]) -> str:
        if col is None:
            return ""
        return str(row.get(col, "") or "").strip()

    return [
        TextRecord(summary=cell(row, summary_col), description=cell(row, desc_col))
        for _, row in df.iterrows()
    ]


def to_rows(results: Sequence[PredictionResult]) -> List[Dict[str, object]]:
    return [
        {
            "Row": r.row_index,
            "Summary": r.summary,
            "Description": r.description,
            "Priority": r.priority,
            "StoryPoints": r.story_points,
            "EstimateHours": r.estimate_hours,
            "Confidence": r.confidence,
            "Rationale": r.rationale,
        }
        for r in results
    ]


def to_csv(results: Sequence[PredictionResult]) -> str:
    df = pd.DataFrame(to_rows(results), columns=OUTPUT_COLUMNS)
    return df.to_csv(index=False)
