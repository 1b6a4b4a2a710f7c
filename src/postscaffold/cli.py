"""
Command line interface for scaffolding new blog posts.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NoReturn, Optional

import click
import typer
from typer.core import TyperCommand
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .categories import Category, CategorySpec, iter_category_specs
from .config import CONFIG_FILENAME, ConfigError, ScaffoldConfig, resolve_config
from .errors import ExternalCommandError, InvalidSlugError, MissingArgumentError
from .plan import ScaffoldPlan, build_plan, build_request
from .runner import ScaffoldReport, execute_plan, run_command
from .util import slugify, write_text_file

console = Console()
app = typer.Typer(help="Scaffold new blog content with git and hugo.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]
SLUG_OPTIONS = ("--slug", "-s")

CONFIG_TEMPLATE = """\
# Scaffold settings. Every key is optional.
default_branch = "master"
git = "git"
hugo = "hugo"
pull = true

# Override the built-in rules of a category by its CLI name.
# An empty branch_prefix disables branch creation.
#
# [[category]]
# name = "article"
# branch_prefix = "article"
# kind = "article"
# path = "article/{year}/{slug}/"
"""


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("SCAFFOLD_LOG_LEVEL")
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _exit_missing_slug(parameter: str = "--slug") -> NoReturn:
    console.print(f"[bold red]Missing slug![/] Pass it with [cyan]{parameter}=<value>[/].")
    raise typer.Exit(code=1)


def _require_slug(value: Optional[str]) -> Optional[str]:
    """Reject an absent slug before the other options are checked."""
    if not value:
        _exit_missing_slug()
    return value


class SlugCommand(TyperCommand):
    """Category command that treats a bare ``--slug`` like an absent one."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.BadOptionUsage as exc:
            if exc.option_name not in SLUG_OPTIONS:
                raise
            _exit_missing_slug()


def _resolve_repo_path(value: Path) -> Path:
    """Ensure the working copy exists and return its absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.is_dir():
        raise typer.BadParameter(f"Working copy must be an existing directory: {resolved}")
    return resolved


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure an explicit config path exists and return absolute path."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(repo: Path, config_path: Optional[Path]) -> ScaffoldConfig:
    try:
        return resolve_config(repo, config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _print_plan(plan: ScaffoldPlan) -> None:
    table = Table(title="New Content")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in plan.summary_rows():
        table.add_row(key, escape(value))
    console.print(table)


def _print_steps(plan: ScaffoldPlan) -> None:
    for index, step in enumerate(plan.steps, start=1):
        console.print(f"  {index}. [cyan]{escape(step.command)}[/]")


def _print_report(report: ScaffoldReport) -> None:
    table = Table(title="Scaffold Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, escape(value))
    console.print(table)


def _run_category(
    category: Category,
    *,
    slug: Optional[str],
    repo: Path,
    config_path: Optional[Path],
    year: Optional[int],
    dry_run: bool,
    make_slug: bool,
) -> None:
    if make_slug and slug:
        slugified = slugify(slug)
        logger.debug("Slugified %r to %r", slug, slugified)
        if not slugified:
            console.print(
                f"[bold red]Invalid slug:[/] --slugify found no letters or digits in {escape(repr(slug))}."
            )
            raise typer.Exit(code=1)
        slug = slugified

    try:
        request = build_request(category, slug)
    except MissingArgumentError as exc:
        _exit_missing_slug(exc.parameter)
    except InvalidSlugError as exc:
        console.print(f"[bold red]Invalid slug:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    config = _load_config_or_exit(repo, config_path)
    plan = build_plan(request, config, year=year)
    _print_plan(plan)

    if dry_run:
        console.print("[bold blue]Dry run.[/] These commands would run:")
        _print_steps(plan)
        return

    try:
        report = execute_plan(plan, cwd=repo, runner=run_command)
    except ExternalCommandError as exc:
        console.print(
            f"[bold red]Step '{exc.step}' failed[/] (exit {exc.returncode}): {escape(' '.join(exc.argv))}"
        )
        raise typer.Exit(code=exc.returncode) from exc

    _print_report(report)
    console.print(f"[bold green]{escape(plan.spec.label)} '{escape(plan.request.slug)}' scaffolded.[/]")


def _register_category_command(spec: CategorySpec) -> None:
    category = spec.category
    if spec.branch_prefix:
        summary = f"Create a {spec.label} on branch {spec.branch_prefix}/<slug> at {spec.path_template}."
    else:
        summary = f"Create a {spec.label} at {spec.path_template} on the default branch."

    def command(
        slug: Optional[str] = typer.Option(
            None,
            "--slug",
            "-s",
            help="Slug used for the content path and branch name.",
            callback=_require_slug,
            is_eager=True,
        ),
        repo: Path = typer.Option(
            Path("."),
            "--repo",
            "-C",
            help="Working copy of the blog repository.",
            callback=_resolve_repo_path,
        ),
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            "-c",
            help=f"Path to a TOML config (defaults to <repo>/{CONFIG_FILENAME} when present).",
            callback=_resolve_config_path,
        ),
        year: Optional[int] = typer.Option(
            None,
            "--year",
            min=1,
            max=9999,
            help="Year used in dated content paths (defaults to the current year).",
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Show the commands without running them.",
        ),
        make_slug: bool = typer.Option(
            False,
            "--slugify",
            help="Normalize the given text into a slug (lowercase, hyphenated) first.",
        ),
    ) -> None:
        _run_category(
            category,
            slug=slug,
            repo=repo,
            config_path=config,
            year=year,
            dry_run=dry_run,
            make_slug=make_slug,
        )

    command.__name__ = f"new_{category.name.lower()}"
    app.command(name=category.value, help=summary, cls=SlugCommand)(command)


for _spec in iter_category_specs():
    _register_category_command(_spec)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show scaffold version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]scaffold[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        names = ", ".join(category.value for category in Category)
        console.print(
            f"[bold yellow]scaffold[/] needs a category ({names}). "
            "Example: [cyan]scaffold how-to --slug=my-new-post[/]",
        )


@app.command()
def categories(
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Working copy whose config overrides should be applied.",
        callback=_resolve_repo_path,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML config.",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    List the content categories and how each one is scaffolded.
    """
    scaffold_config = _load_config_or_exit(repo, config)
    table = Table(title="Categories")
    table.add_column("Command", no_wrap=True)
    table.add_column("Branch")
    table.add_column("Kind")
    table.add_column("Path", overflow="fold")
    for spec in iter_category_specs():
        effective = scaffold_config.category_spec(spec.category)
        branch = f"{effective.branch_prefix}/<slug>" if effective.branch_prefix else "-"
        table.add_row(
            effective.category.value,
            escape(branch),
            escape(effective.kind),
            escape(effective.path_template),
        )
    console.print(table)


@app.command("init-config")
def init_config(
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Working copy where the config file is written.",
        callback=_resolve_repo_path,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file.",
    ),
) -> None:
    """
    Write a commented default scaffold.toml into the working copy.
    """
    target = repo / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[bold yellow]{escape(str(target))} already exists.[/] Use --force to overwrite it.")
        raise typer.Exit(code=1)
    write_text_file(target, CONFIG_TEMPLATE)
    logger.info("Wrote default configuration to %s", target)
    console.print(f"[bold green]Wrote[/] {escape(str(target))}")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
