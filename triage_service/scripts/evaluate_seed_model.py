import os, json, time
from datetime import datetime, timezone

import joblib
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sklearn.metrics import (
    accuracy_score, f1_score, classification_report,
    confusion_matrix, ConfusionMatrixDisplay
)

from triage_service import config
from triage_service.classifier import PriorityClassifier, SeedNaiveBayesClassifier
from triage_service.classifier.seeds import PRIORITY_LABELS
from triage_service.service import PredictionService, TextRecord


MODEL_VERSION = config.MODEL_VERSION
REPORT_DIR = os.getenv("REPORT_DIR", f"reports/{MODEL_VERSION}")

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_PATH = os.getenv("EVAL_CSV", os.path.join(BASE_DIR, "data", "eval.csv"))
OUT_DIR = os.getenv("SEED_MODEL_OUT_DIR", os.path.join(BASE_DIR, "models", "seed"))

LABEL_COL = "priority"
SUMMARY_COL = "summary"
DESC_COL = "description"
ALLOWED_LABELS = list(PRIORITY_LABELS)  # fixed order for plots


def percentile_ms(arr, p):
    return float(np.percentile(arr, p) * 1000.0)


def load_eval_frame(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]

    if LABEL_COL not in df.columns:
        raise ValueError(f"Missing column: {LABEL_COL}")
    if SUMMARY_COL not in df.columns and DESC_COL not in df.columns:
        raise ValueError(f"Need at least one of: {SUMMARY_COL}, {DESC_COL}")

    for col in (SUMMARY_COL, DESC_COL):
        if col not in df.columns:
            df[col] = ""

    df[LABEL_COL] = df[LABEL_COL].str.strip().str.capitalize()
    return df[df[LABEL_COL].isin(ALLOWED_LABELS)].copy()


def main():
    if not os.path.exists(DATA_PATH):
        raise FileNotFoundError(f"eval csv not found at: {DATA_PATH}")

    os.makedirs(OUT_DIR, exist_ok=True)
    os.makedirs(REPORT_DIR, exist_ok=True)

    df = load_eval_frame(DATA_PATH)
    records = [
        TextRecord(summary=row[SUMMARY_COL], description=row[DESC_COL])
        for _, row in df.iterrows()
    ]
    y_true = df[LABEL_COL].tolist()

    seed_model = SeedNaiveBayesClassifier()
    seed_model.load()
    service = PredictionService(PriorityClassifier(seed_model))

    # --- Predictions + per-record latency (full path incl. override and scoring) ---
    service.predict(TextRecord(summary="warm up"))  # warm-up

    y_pred = []
    times = []
    for record in records:
        start = time.perf_counter()
        result = service.predict(record)
        end = time.perf_counter()
        times.append(end - start)
        y_pred.append(result.priority)
    times = np.array(times)

    acc = float(accuracy_score(y_true, y_pred))
    f1_macro = float(f1_score(y_true, y_pred, average="macro", labels=ALLOWED_LABELS, zero_division=0))
    report = classification_report(
        y_true, y_pred, labels=ALLOWED_LABELS, digits=4, output_dict=True, zero_division=0
    )

    # --- Confusion matrix plot ---
    cm = confusion_matrix(y_true, y_pred, labels=ALLOWED_LABELS)
    disp = ConfusionMatrixDisplay(confusion_matrix=cm, display_labels=ALLOWED_LABELS)
    fig = plt.figure()
    ax = fig.add_subplot(111)
    disp.plot(ax=ax, values_format="d")
    ax.set_title(f"Confusion Matrix – {MODEL_VERSION}")
    fig.tight_layout()
    fig.savefig(os.path.join(REPORT_DIR, "confusion_matrix.png"), dpi=200)
    plt.close(fig)

    latency_stats = {
        "p50_ms": percentile_ms(times, 50),
        "p95_ms": percentile_ms(times, 95),
        "p99_ms": percentile_ms(times, 99),
        "mean_ms": float(times.mean() * 1000.0),
        "n": int(len(times)),
    }

    # --- Persist the fitted seed model for inspection ---
    joblib.dump(seed_model.vectorizer, os.path.join(OUT_DIR, "count_vectorizer.joblib"))
    joblib.dump(seed_model.model, os.path.join(OUT_DIR, "naive_bayes_model.joblib"))

    metrics = {
        "modelVersion": MODEL_VERSION,
        "evaluatedAt": datetime.now(timezone.utc).isoformat(),
        "dataPath": DATA_PATH,
        "rows": int(len(df)),
        "seedPhrases": len(seed_model.corpus),
        "metrics": {"accuracy": acc, "f1_macro": f1_macro},
        "per_class": {
            lbl: {
                "f1": float(report[lbl]["f1-score"]),
                "precision": float(report[lbl]["precision"]),
                "recall": float(report[lbl]["recall"]),
            } for lbl in ALLOWED_LABELS
        },
        "latency_full_path": latency_stats,
    }

    with open(os.path.join(REPORT_DIR, "metrics.json"), "w", encoding="utf-8") as f:
        json.dump(metrics, f, ensure_ascii=False, indent=2)

    print("✅ Evaluation complete")
    print(f"Accuracy: {acc:.4f} | F1_macro: {f1_macro:.4f}")
    print(f"Saved plots + metrics to: {REPORT_DIR}")


if __name__ == "__main__":
    main()
