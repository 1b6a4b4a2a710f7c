import subprocess
import sys
from pathlib import Path

import pytest

from postscaffold.errors import ExternalCommandError, InvalidSlugError, MissingArgumentError
from postscaffold.plan import build_plan, build_request
from postscaffold.runner import COMMAND_NOT_FOUND, execute_plan, run_command, scaffold

from conftest import RecordingRunner


def test_execute_plan_runs_steps_in_order(blog_repo: Path, recorder: RecordingRunner) -> None:
    plan = build_plan(build_request("cstip", "format-strings"), year=2023)

    report = execute_plan(plan, cwd=blog_repo, runner=recorder)

    assert recorder.commands == [
        "git checkout master",
        "git pull",
        "git checkout -b cstip/format-strings",
        "hugo new --kind cstip csharp-tip/format-strings/index.md",
    ]
    assert all(cwd == blog_repo.resolve() for _, cwd in recorder.calls)
    assert report.completed == list(plan.steps)


def test_execute_plan_stops_at_first_failure(blog_repo: Path) -> None:
    failing = RecordingRunner(fail_on="pull", returncode=128)
    plan = build_plan(build_request("article", "my-post"), year=2023)

    with pytest.raises(ExternalCommandError) as exc:
        execute_plan(plan, cwd=blog_repo, runner=failing)

    assert exc.value.step == "pull"
    assert exc.value.returncode == 128
    assert exc.value.argv == ("git", "pull")
    assert failing.commands == ["git checkout master", "git pull"]


def test_generator_failure_keeps_created_branch(blog_repo: Path) -> None:
    failing = RecordingRunner(fail_on="hugo", returncode=255)
    plan = build_plan(build_request("architecture-note", "cqrs"), year=2023)

    with pytest.raises(ExternalCommandError) as exc:
        execute_plan(plan, cwd=blog_repo, runner=failing)

    assert exc.value.step == "generate"
    # no rollback commands are issued after the failure
    assert failing.commands[-1].startswith("hugo new")
    assert "git checkout -b archi-note/cqrs" in failing.commands


@pytest.mark.parametrize("category", ["article", "architecture-note", "cstip", "how-to", "what-is"])
@pytest.mark.parametrize("slug", [None, ""])
def test_missing_slug_issues_no_commands(category: str, slug, blog_repo: Path, recorder: RecordingRunner) -> None:
    with pytest.raises(MissingArgumentError):
        scaffold(category, slug, cwd=blog_repo, runner=recorder)

    assert recorder.calls == []


def test_invalid_slug_issues_no_commands(blog_repo: Path, recorder: RecordingRunner) -> None:
    with pytest.raises(InvalidSlugError):
        scaffold("cstip", "bad slug", cwd=blog_repo, runner=recorder)

    assert recorder.calls == []


def test_dry_run_issues_no_commands(blog_repo: Path, recorder: RecordingRunner) -> None:
    report = scaffold("how-to", "my-new-post", cwd=blog_repo, dry_run=True, runner=recorder)

    assert report.dry_run is True
    assert report.completed == []
    assert len(report.plan.steps) == 3
    assert recorder.calls == []


def test_run_command_returns_exit_status(tmp_path: Path) -> None:
    assert run_command([sys.executable, "-c", "raise SystemExit(3)"], tmp_path) == 3
    assert run_command([sys.executable, "-c", "pass"], tmp_path) == 0


def test_run_command_missing_executable(tmp_path: Path) -> None:
    assert run_command(["definitely-not-a-real-tool-xyz"], tmp_path) == COMMAND_NOT_FOUND


def test_run_command_does_not_capture_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_run(args, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert run_command(["git", "pull"], tmp_path) == 0
    assert "capture_output" not in seen
    assert "stdout" not in seen and "stderr" not in seen
    assert seen["cwd"] == str(tmp_path)
