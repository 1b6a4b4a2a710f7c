"""
Date helpers.
"""

from __future__ import annotations

from datetime import datetime


def local_now() -> datetime:
    """Return the current local datetime."""
    return datetime.now().astimezone()


def current_year() -> int:
    return local_now().year
