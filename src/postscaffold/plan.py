"""
Turn a scaffold request into the ordered list of git/hugo commands to run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .categories import Category, CategorySpec, parse_category
from .config import ScaffoldConfig
from .util import current_year, validate_slug


@dataclass(frozen=True)
class ScaffoldRequest:
    """A validated (category, slug) pair supplied by the user."""

    category: Category
    slug: str


@dataclass(frozen=True)
class PlanStep:
    """
    One external command in a scaffold plan.

    Attributes:
        name: Short identifier ("checkout-base", "pull", "create-branch", "generate").
        argv: Full argument vector, executable first.
    """
    name: str
    argv: Tuple[str, ...]

    @property
    def command(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class ScaffoldPlan:
    """
    Everything a run will do, derived from a request and the configuration.

    Attributes:
        request: The request the plan was built for.
        spec: Effective category rules (after config overrides).
        branch: Branch to create, or None.
        content_path: Path handed to ``hugo new``.
        steps: Commands in execution order.
    """
    request: ScaffoldRequest
    spec: CategorySpec
    branch: Optional[str]
    content_path: str
    steps: Tuple[PlanStep, ...]

    @property
    def kind(self) -> str:
        return self.spec.kind

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Category", self.spec.label)
        yield ("Slug", self.request.slug)
        yield ("Branch", self.branch or "(none)")
        yield ("Kind", self.kind)
        yield ("Path", self.content_path)


def build_request(category: str | Category, slug: Optional[str]) -> ScaffoldRequest:
    """
    Validate raw user input.

    Raises:
        MissingArgumentError: If the slug is absent or empty.
        InvalidSlugError: If the slug is unsafe.
        ValueError: If the category is unknown.
    """
    resolved = parse_category(category)
    return ScaffoldRequest(category=resolved, slug=validate_slug(slug))


def build_plan(
    request: ScaffoldRequest,
    config: Optional[ScaffoldConfig] = None,
    *,
    year: Optional[int] = None,
) -> ScaffoldPlan:
    """
    Build the command sequence for a request without running anything.

    The slug is used verbatim in both the branch name and the content path.

    Args:
        request: Validated request.
        config: Effective configuration; defaults are used when omitted.
        year: Year substituted into ``{year}`` path templates; defaults to the current year.

    Returns:
        A ScaffoldPlan whose steps sync the base branch, optionally branch off, then call hugo.

    Raises:
        ValueError: If the year is not positive.
    """
    config = config or ScaffoldConfig()
    spec = config.category_spec(request.category)
    year = year if year is not None else current_year()
    if year < 1:
        raise ValueError(f"year must be a positive number, got {year}")

    branch = spec.branch_name(request.slug)
    content_path = spec.content_path(request.slug, year)

    steps = [PlanStep("checkout-base", (config.git, "checkout", config.default_branch))]
    if config.pull:
        steps.append(PlanStep("pull", (config.git, "pull")))
    if branch:
        steps.append(PlanStep("create-branch", (config.git, "checkout", "-b", branch)))
    steps.append(PlanStep("generate", (config.hugo, "new", "--kind", spec.kind, content_path)))

    return ScaffoldPlan(
        request=request,
        spec=spec,
        branch=branch,
        content_path=content_path,
        steps=tuple(steps),
    )
