# challengegen/patterns.py
"""
Lexical patterns used by the compliance validator.

Matching is plain case-insensitive substring containment, so ordinary words
that contain a pattern are caught as well ("win" matches "winner" and
"window"). Known false positives are accepted; paraphrases are not caught.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

ENDORSEMENT_PATTERNS = (
    "uses", "recommends", "prefers", "loves", "favorite",
    "endorses", "sponsors", "partners with",
)

GAMBLING_PATTERNS = (
    "win", "prize", "jackpot", "lottery", "sweepstakes",
    "cash prize", "money", "payout", "winnings",
)

HEALTH_CLAIM_PATTERNS = (
    "cures", "treats", "heals", "prevents disease",
    "medical benefit", "health benefit",
)

CERTAINTY_PATTERNS = (
    "always", "never fails", "guaranteed", "proven fact",
    "scientifically proven",
)

CONTROVERSIAL_PATTERNS = (
    "political", "religion", "religious", "violence",
    "drug", "alcohol", "weapon", "crime",
)

SENSITIVE_PATTERNS = (
    "death", "tragedy", "scandal", "controversy",
    "lawsuit", "legal issue", "arrested",
)


class PatternSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    forbidden: Tuple[str, ...]
    warning: Tuple[str, ...]


DEFAULT_PATTERNS = PatternSet(
    forbidden=ENDORSEMENT_PATTERNS + GAMBLING_PATTERNS + HEALTH_CLAIM_PATTERNS + CERTAINTY_PATTERNS,
    warning=CONTROVERSIAL_PATTERNS + SENSITIVE_PATTERNS,
)
