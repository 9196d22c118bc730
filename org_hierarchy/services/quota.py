"""
Quota arithmetic.

A limit is a non-negative integer cap or ``None`` (unlimited). Counts are
never stored on the parent; callers pass the active child count they got
from the store.
"""

from typing import Mapping, Optional

UNLIMITED = None


def within_limit(limit: Optional[int], current: int) -> bool:
    """True when one more child fits under ``limit``."""
    if limit is UNLIMITED:
        return True
    return current < limit


def check_limit(limits: Mapping[str, Optional[int]], limit_type: str, current: Optional[int]) -> bool:
    """
    Evaluate one limit of a parent.

    ``current`` is None for limit types the caller does not count (users,
    storage, forms...); those always pass, as does a limit absent from the
    document.
    """
    if current is None:
        return True
    return within_limit((limits or {}).get(limit_type, UNLIMITED), current)
