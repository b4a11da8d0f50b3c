"""
archpass.score
Additive strength heuristic: length and character-class bonuses, penalties for
repeated characters and ascending runs, clamped to 0-100.
"""

import string
from dataclasses import dataclass, field
from typing import List

_LOWER = frozenset(string.ascii_lowercase)
_UPPER = frozenset(string.ascii_uppercase)
_DIGITS = frozenset(string.digits)

# position of each character inside the runs that count as "sequential"
_SEQUENCE_POS = {c: (0, i) for i, c in enumerate(string.ascii_lowercase)}
_SEQUENCE_POS.update({c: (1, i) for i, c in enumerate("123456789")})

LEVELS = (
    (80, "very_strong"),
    (60, "strong"),
    (40, "moderate"),
    (20, "weak"),
)


@dataclass(frozen=True)
class StrengthResult:
    score: int
    level: str
    feedback: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"score": self.score, "level": self.level, "feedback": list(self.feedback)}


def level_for(score: int) -> str:
    for threshold, label in LEVELS:
        if score >= threshold:
            return label
    return "very_weak"


def score_password(password: str) -> StrengthResult:
    """
    Score a password on a 0-100 scale and return score, level and feedback.
    """
    has_lower = has_upper = has_digit = has_special = False
    repeated = sequential = False

    prev = None
    repeat_len = 0
    seq_len = 0
    prev_pos = None

    for c in password:
        if c in _LOWER:
            has_lower = True
        elif c in _UPPER:
            has_upper = True
        elif c in _DIGITS:
            has_digit = True
        else:
            has_special = True

        repeat_len = repeat_len + 1 if c == prev else 1
        if repeat_len >= 3:
            repeated = True

        pos = _SEQUENCE_POS.get(c.lower())
        if pos and prev_pos and pos[0] == prev_pos[0] and pos[1] == prev_pos[1] + 1:
            seq_len += 1
        else:
            seq_len = 1 if pos else 0
        if seq_len >= 3:
            sequential = True

        prev, prev_pos = c, pos

    score = 0
    feedback: List[str] = []

    # --- Length ---
    length = len(password)
    if length >= 8:
        score += 20
    else:
        feedback.append("Password should be at least 8 characters long")
    if length >= 12:
        score += 10
    if length >= 16:
        score += 10

    # --- Character variety ---
    if has_lower:
        score += 10
    else:
        feedback.append("Add lowercase letters")
    if has_upper:
        score += 10
    else:
        feedback.append("Add uppercase letters")
    if has_digit:
        score += 10
    else:
        feedback.append("Add numbers")
    if has_special:
        score += 20
    else:
        feedback.append("Add special characters")

    # --- Penalties (no feedback) ---
    if repeated:
        score -= 10
    if sequential:
        score -= 5

    score = max(0, min(100, score))
    return StrengthResult(score=score, level=level_for(score), feedback=feedback)
