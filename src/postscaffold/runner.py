"""
Run a scaffold plan against the working copy, one blocking command at a time.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .categories import Category
from .config import ScaffoldConfig
from .errors import ExternalCommandError
from .plan import PlanStep, ScaffoldPlan, build_plan, build_request

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Path], int]

COMMAND_NOT_FOUND = 127


def run_command(argv: Sequence[str], cwd: Path) -> int:
    """
    Run one external command and return its exit status.

    Output is not captured, so git/hugo diagnostics go straight to the terminal.
    A missing executable is reported as exit status 127, like a shell would.
    """
    try:
        completed = subprocess.run(list(argv), cwd=str(cwd), check=False)
    except FileNotFoundError:
        logger.error("Executable not found: %s", argv[0])
        return COMMAND_NOT_FOUND
    return completed.returncode


@dataclass
class ScaffoldReport:
    """
    Stores what happened during a scaffold run.

    Attributes:
        plan: The plan that was executed (or only printed, for dry runs).
        cwd: Working copy the commands ran in.
        completed: Steps that exited successfully, in order.
        dry_run: True if nothing was executed.
    """
    plan: ScaffoldPlan
    cwd: Path
    completed: List[PlanStep] = field(default_factory=list)
    dry_run: bool = False

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield from self.plan.summary_rows()
        yield ("Working copy", str(self.cwd))
        yield ("Steps run", f"{len(self.completed)}/{len(self.plan.steps)}")


def execute_plan(
    plan: ScaffoldPlan,
    *,
    cwd: Path | str,
    runner: CommandRunner = run_command,
) -> ScaffoldReport:
    """
    Execute plan steps in order, stopping at the first failure.

    Nothing is rolled back: a branch that was already created, or a pull that
    already happened, is left as-is.

    Raises:
        ExternalCommandError: If a command exits non-zero.
    """
    workdir = Path(cwd).expanduser().resolve()
    report = ScaffoldReport(plan=plan, cwd=workdir)
    for step in plan.steps:
        logger.info("Running %s: %s", step.name, step.command)
        returncode = runner(step.argv, workdir)
        if returncode != 0:
            logger.error("Step %s failed with exit status %d", step.name, returncode)
            raise ExternalCommandError(step.name, step.argv, returncode)
        report.completed.append(step)
    return report


def scaffold(
    category: str | Category,
    slug: Optional[str],
    *,
    cwd: Path | str,
    config: Optional[ScaffoldConfig] = None,
    year: Optional[int] = None,
    dry_run: bool = False,
    runner: CommandRunner = run_command,
) -> ScaffoldReport:
    """
    Validate input, build the plan and run it.

    Input is validated before any command is issued, so a missing or unsafe
    slug never touches the repository.

    Raises:
        MissingArgumentError: If the slug is absent.
        InvalidSlugError: If the slug is unsafe.
        ExternalCommandError: If git or hugo fails.
    """
    request = build_request(category, slug)
    plan = build_plan(request, config, year=year)
    if dry_run:
        logger.info("Dry run: %d step(s) planned, none executed", len(plan.steps))
        return ScaffoldReport(plan=plan, cwd=Path(cwd).expanduser().resolve(), dry_run=True)
    return execute_plan(plan, cwd=cwd, runner=runner)
