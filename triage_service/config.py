import os


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


MODEL_VERSION = os.getenv("TRIAGE_MODEL_VERSION", "seed-nb-v1")
DEBUG = _flag("TRIAGE_DEBUG")

# Upload limit for /api/predict (bytes)
MAX_UPLOAD_BYTES = int(os.getenv("TRIAGE_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

TOP_RISKY_LIMIT = int(os.getenv("TRIAGE_TOP_RISKY_LIMIT", "5"))
