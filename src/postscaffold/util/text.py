"""
Slug helpers.
"""

from __future__ import annotations

import re
import unicodedata

from ..errors import InvalidSlugError, MissingArgumentError

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
_SAFE_SLUG = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def slugify(value: str) -> str:
    """
    Turn a free-form title into a lowercase, hyphen-separated slug.

    Accents are folded to ASCII first. Returns an empty string when nothing usable remains.
    """
    folded = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    raw = folded.strip().lower()
    return _SLUG_PATTERN.sub("-", raw).strip("-")


def validate_slug(slug: str | None, *, parameter: str = "--slug") -> str:
    """
    Check that a slug can be used verbatim as a content path segment and git branch suffix.

    The slug is returned unchanged.

    Raises:
        MissingArgumentError: If the slug is None or empty.
        InvalidSlugError: If the slug contains characters unsafe for paths, URLs or git refs.
    """
    if not slug:
        raise MissingArgumentError(parameter)
    if not _SAFE_SLUG.match(slug):
        raise InvalidSlugError(
            slug,
            "use letters, digits, '.', '_' or '-', starting with a letter or digit",
        )
    if ".." in slug:
        raise InvalidSlugError(slug, "must not contain '..'")
    if slug.endswith(".") or slug.endswith(".lock"):
        raise InvalidSlugError(slug, "must not end with '.' or '.lock'")
    return slug
