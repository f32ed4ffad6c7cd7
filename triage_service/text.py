import re
from typing import List, Optional

# Letter runs keep inner hyphens ("well-defined", "cross-team"), digit runs keep
# "." and "_", anything else is split into single characters.
_TOKEN_RE = re.compile(r"[a-zÀ-ÿ-]+|[0-9._]+|\S")
_KEEP_RE = re.compile(r"[a-z0-9#]")

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "to", "of", "in", "on", "for", "with",
    "by", "at", "is", "are", "be", "this", "that", "it", "as", "from", "into",
    "via", "over", "under", "we", "i", "you",
})


def tokenize(text: Optional[str]) -> List[str]:
    lower = (text or "").lower()
    return [
        tok for tok in _TOKEN_RE.findall(lower)
        if _KEEP_RE.search(tok) and tok not in STOP_WORDS
    ]


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, tokenize and drop stop-words / punctuation-only tokens."""
    return " ".join(tokenize(text))
