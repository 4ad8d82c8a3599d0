#!/usr/bin/env python3
"""
Serialization helpers for response models.
"""

from typing import Any, Iterable, List, Optional
from datetime import datetime


def optional_str(value: Optional[Any]) -> Optional[str]:
    """str() for ids that may be missing."""
    if value is None:
        return None
    return str(value)


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert a datetime to an ISO 8601 string.

    Args:
        dt: Datetime object, or None.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def sorted_names(values: Optional[Iterable[str]]) -> List[str]:
    """Stable list form of a set of category or skill names."""
    return sorted(values or ())
