# schoolhub/services/scores.py
"""Score statistics shared by the student profile and the results report."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional

PASS_THRESHOLD = 60


def round_half_up(value: float, precision: int = 2) -> float:
    """60.625 -> 60.63; the builtin round() would give 60.62"""
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if precision <= 0 else float(rounded)


def summarize_scores(scores: Iterable[Optional[float]], precision: int = 2) -> Dict[str, Any]:
    """Average, extremes and pass rate of the non-null scores"""
    values = [s for s in scores if s is not None]
    if not values:
        return {
            "average": 0,
            "count": 0,
            "max": 0,
            "min": 0,
            "pass_rate": 0,
            "has_data": False,
        }

    passed = sum(1 for s in values if s >= PASS_THRESHOLD)
    return {
        "average": round_half_up(sum(values) / len(values), precision),
        "count": len(values),
        "max": max(values),
        "min": min(values),
        "pass_rate": round_half_up(passed / len(values) * 100, precision),
        "has_data": True,
    }
