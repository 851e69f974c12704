import re
import logging
from dataclasses import dataclass
from enum import Enum

from zxcvbn import zxcvbn

from vaultguard.config.config_vault import (
    STRENGTH_LEVELS, MAX_SCORE, BASELINE_POINTS, FEEDBACK, ZXCVBN_MAX_LENGTH,
)

logger = logging.getLogger(__name__)

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


class StrengthLevel(Enum):
    VERY_WEAK = STRENGTH_LEVELS[0]
    WEAK = STRENGTH_LEVELS[1]
    FAIR = STRENGTH_LEVELS[2]
    GOOD = STRENGTH_LEVELS[3]
    STRONG = STRENGTH_LEVELS[4]
    VERY_STRONG = STRENGTH_LEVELS[5]

    @classmethod
    def from_score(cls, score: int) -> "StrengthLevel":
        return list(cls)[score]


@dataclass(frozen=True)
class StrengthResult:
    """
    Outcome of scoring one password.

    score: 0 (very weak) to 5 (very strong)
    level: display label for the score
    feedback: suggestions, length first then character classes
    """
    score: int
    level: StrengthLevel
    feedback: tuple[str, ...] = ()


def score_password(password: str) -> StrengthResult:
    """
    Heuristic password strength.

    One point each for length >= 8, >= 12, >= 16 and > 20, and one point
    each for containing a lowercase letter, an uppercase letter, a digit
    and a symbol. Any non-empty password earns at least one class point,
    so that baseline point is taken off before clamping to 0-5: a short
    single-class password such as "aaaa" is Very Weak.

    Only the length and the set of characters matter, so any
    permutation of a password scores the same.

    Args:
        password: Candidate password. May be empty.

    Returns:
        StrengthResult with score, level and ordered feedback.
    """
    score = 0
    feedback = []
    length = len(password)

    if length >= 8:
        score += 1
    else:
        feedback.append(FEEDBACK["length"])

    if length >= 12:
        score += 1
    if length >= 16:
        score += 1

    if _LOWER.search(password):
        score += 1
    else:
        feedback.append(FEEDBACK["lower"])

    if _UPPER.search(password):
        score += 1
    else:
        feedback.append(FEEDBACK["upper"])

    if _DIGIT.search(password):
        score += 1
    else:
        feedback.append(FEEDBACK["digits"])

    if _SYMBOL.search(password):
        score += 1
    else:
        feedback.append(FEEDBACK["symbols"])

    if length > 20:
        score += 1

    score = max(0, min(score - BASELINE_POINTS, MAX_SCORE))
    return StrengthResult(score=score,
                          level=StrengthLevel.from_score(score),
                          feedback=tuple(feedback))


class StrengthScorer:
    """Callable wrapper around :func:`score_password` for injection into hosts."""

    def score(self, password: str) -> StrengthResult:
        return score_password(password)

    __call__ = score


def estimate_crack_time(password: str) -> str:
    """
    Offline crack-time estimate using the zxcvbn library.
    https://pypi.org/project/zxcvbn/

    Reports the display string for offline fast hashing at 1e10
    guesses per second. Only the first ZXCVBN_MAX_LENGTH characters are
    analysed. Informational only; it does not feed into score_password.

    Returns:
        Human readable duration such as "3 hours" or "centuries".
    """
    if not password:
        return "less than a second"

    results = zxcvbn(password[:ZXCVBN_MAX_LENGTH], max_length=ZXCVBN_MAX_LENGTH)
    return str(results["crack_times_display"]["offline_fast_hashing_1e10_per_second"])
