#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from typing import Optional, Any
from datetime import datetime


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Safely convert datetime to ISO format string.
    
    Args:
        dt: Datetime object.
    
    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def enum_value(value: Optional[Any]) -> Optional[str]:
    """Return the .value of an enum member, or the value itself."""
    if value is None:
        return None
    return getattr(value, "value", value)
