"""Squad Analytics: shared utility functions.

Numeric coercion and pair keys used by every engine module.
"""
import math
from numbers import Real


# ── Numeric coercion ─────────────────────────────────────────────────────

def as_count(value) -> int:
    """Coerce a raw count to a non-negative int, treating missing values as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Real):
        numeric = float(value)
    else:
        try:
            numeric = float(str(value).strip())
        except (TypeError, ValueError):
            return 0
    if math.isnan(numeric) or math.isinf(numeric):
        return 0
    return max(0, int(numeric))


def as_score(value) -> int:
    """Coerce a match score; same rules as :func:`as_count`."""
    return as_count(value)


# ── Pairs ────────────────────────────────────────────────────────────────

def pair_key(name_a: str, name_b: str) -> tuple[str, str]:
    """Order-independent key for a player pair."""
    return (name_a, name_b) if name_a <= name_b else (name_b, name_a)
