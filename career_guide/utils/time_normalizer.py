"""
Utility functions for normalizing daily-plan time estimates.
Model estimates rarely add up to the plan length, so they are rescaled
proportionally to an exact total.
"""
import logging
import math
from typing import Iterable

logger = logging.getLogger(__name__)

DAILY_PLAN_MINUTES = 60


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_minutes(values: Iterable[int], target: int = DAILY_PLAN_MINUTES) -> list[int]:
    """
    Scale minute estimates so they sum to exactly `target`.

    Args:
        values: Ordered minute estimates from the model (non-negative)
        target: Required total in minutes

    Returns:
        New list, same length and order, summing to `target`

    Raises:
        ValueError: If the list is empty, has a negative value or sums to
            zero. Callers treat this as a malformed plan.

    Algorithm:
        - Each value is multiplied by target / current_total and rounded
          half-up
        - The rounding residual is added to the last value
        - If that would make the last value negative, the shortfall is
          carried backwards onto earlier values
    """
    minutes = list(values)

    if target <= 0:
        raise ValueError(f"target must be positive, got {target}")
    if not minutes:
        raise ValueError("Cannot normalize an empty list of estimates")
    if any(m < 0 for m in minutes):
        raise ValueError(f"Time estimates must be non-negative: {minutes}")

    current_total = sum(minutes)
    if current_total == 0:
        raise ValueError("Time estimates sum to zero")
    if current_total == target:
        return minutes

    ratio = target / current_total
    scaled = [_round_half_up(m * ratio) for m in minutes]

    residual = target - sum(scaled)
    scaled[-1] += residual

    index = len(scaled) - 1
    while index > 0 and scaled[index] < 0:
        scaled[index - 1] += scaled[index]
        scaled[index] = 0
        index -= 1

    logger.debug(f"   Normalized estimates {minutes} -> {scaled} (target {target} min)")
    return scaled
