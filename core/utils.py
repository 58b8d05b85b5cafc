import math
import logging
from typing import Any

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for non-negative values.

    Python's built-in round() uses banker's rounding (62.5 -> 62), which
    makes reported percentages drift from what users expect. All reported
    scores and percentages go through this helper instead.

    Args:
        value: Value to round
        digits: Number of decimal places to keep

    Returns:
        Rounded value
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round1(value: float) -> float:
    """Round to one decimal place (used for averages and percentages)."""
    return round_half_up(value, 1)


def to_percent(ratio: float) -> int:
    """Convert a [0, 1] ratio into an integer percentage, clipped to [0, 100]."""
    percent = int(round_half_up(100.0 * ratio))
    if not (0 <= percent <= 100):
        logger.error(f"Percentage out of range: {percent}, clipping to [0, 100]")
        return max(0, min(100, percent))
    return percent


def is_number(value: Any) -> bool:
    """True for finite int/float values; bool is rejected even though it subclasses int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False
