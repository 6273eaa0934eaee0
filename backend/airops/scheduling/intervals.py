"""
Time window overlap.
"""
from datetime import datetime


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """
    Check whether two closed intervals [a_start, a_end] and [b_start, b_end] overlap.

    Boundaries are inclusive: a flight arriving at the exact instant another
    departs conflicts with it.
    """
    return a_start <= b_end and b_start <= a_end
