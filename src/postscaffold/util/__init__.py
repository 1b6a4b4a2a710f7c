"""
Shared utility helpers for slugs, dates and file writes.
"""

from .filesystem import write_text_file
from .text import slugify, validate_slug
from .time import current_year, local_now

__all__ = [
    "write_text_file",
    "slugify",
    "validate_slug",
    "current_year",
    "local_now",
]
