"""
Lookup table describing how each kind of blog content is scaffolded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional


class Category(str, Enum):
    """Content categories known to the blog, keyed by their CLI name."""

    ARTICLE = "article"
    ARCHITECTURE_NOTE = "architecture-note"
    CSHARP_TIP = "cstip"
    HOW_TO = "how-to"
    WHAT_IS = "what-is"


@dataclass(frozen=True)
class CategorySpec:
    """
    Scaffolding rules for one category.

    Attributes:
        category: The category these rules apply to.
        label: Human-readable name shown in summaries.
        branch_prefix: Prefix of the working branch, or None when no branch is created.
        kind: Hugo archetype passed to ``hugo new --kind``.
        path_template: Content path relative to ``content/``; ``{slug}`` and ``{year}`` are substituted.
    """
    category: Category
    label: str
    branch_prefix: Optional[str]
    kind: str
    path_template: str

    @property
    def creates_branch(self) -> bool:
        return bool(self.branch_prefix)

    def branch_name(self, slug: str) -> Optional[str]:
        if not self.branch_prefix:
            return None
        return f"{self.branch_prefix}/{slug}"

    def content_path(self, slug: str, year: int) -> str:
        return self.path_template.format(slug=slug, year=year)


CATEGORY_SPECS: Dict[Category, CategorySpec] = {
    Category.ARTICLE: CategorySpec(
        category=Category.ARTICLE,
        label="Article",
        branch_prefix="article",
        kind="article",
        path_template="article/{year}/{slug}/",
    ),
    Category.ARCHITECTURE_NOTE: CategorySpec(
        category=Category.ARCHITECTURE_NOTE,
        label="Architecture note",
        branch_prefix="archi-note",
        kind="archi",
        path_template="architecture-note/{slug}",
    ),
    Category.CSHARP_TIP: CategorySpec(
        category=Category.CSHARP_TIP,
        label="C# Tip",
        branch_prefix="cstip",
        kind="cstip",
        path_template="csharp-tip/{slug}/index.md",
    ),
    Category.HOW_TO: CategorySpec(
        category=Category.HOW_TO,
        label="How to?",
        branch_prefix=None,
        kind="how-to",
        path_template="how-to/{slug}",
    ),
    Category.WHAT_IS: CategorySpec(
        category=Category.WHAT_IS,
        label="What is?",
        branch_prefix=None,
        kind="what-is",
        path_template="what-is/{slug}",
    ),
}


def parse_category(value: str | Category) -> Category:
    """
    Resolve a CLI name (``how-to``) or enum member name (``HOW_TO``) to a Category.

    Raises:
        ValueError: If the value does not name a known category.
    """
    if isinstance(value, Category):
        return value
    candidate = (value or "").strip()
    try:
        return Category(candidate.lower())
    except ValueError:
        pass
    try:
        return Category[candidate.upper().replace("-", "_")]
    except KeyError:
        known = ", ".join(item.value for item in Category)
        raise ValueError(f"Unknown category '{value}'. Expected one of: {known}.") from None


def get_category_spec(category: str | Category) -> CategorySpec:
    return CATEGORY_SPECS[parse_category(category)]


def iter_category_specs() -> Iterable[CategorySpec]:
    for category in Category:
        yield CATEGORY_SPECS[category]
