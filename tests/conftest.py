from pathlib import Path
import textwrap
from typing import List, Optional, Sequence, Tuple

import pytest
from typer.testing import CliRunner


class RecordingRunner:
    """Stand-in for run_command that records calls and can fail a chosen command."""

    def __init__(self, fail_on: Optional[str] = None, returncode: int = 1) -> None:
        self.calls: List[Tuple[Tuple[str, ...], Path]] = []
        self.fail_on = fail_on
        self.returncode = returncode

    def __call__(self, argv: Sequence[str], cwd: Path) -> int:
        self.calls.append((tuple(argv), cwd))
        if self.fail_on is not None and self.fail_on in " ".join(argv):
            return self.returncode
        return 0

    @property
    def commands(self) -> List[str]:
        return [" ".join(argv) for argv, _ in self.calls]


@pytest.fixture(autouse=True)
def _clean_scaffold_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SCAFFOLD_DEFAULT_BRANCH", "SCAFFOLD_GIT", "SCAFFOLD_HUGO", "SCAFFOLD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def recorder() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def blog_repo(tmp_path: Path) -> Path:
    """
    An empty directory standing in for the blog's working copy.

    Git and hugo are never invoked for real, so no repository is initialised.
    """
    repo = tmp_path / "blog"
    repo.mkdir()
    return repo


@pytest.fixture
def write_config(blog_repo: Path):
    def _write(body: str, name: str = "scaffold.toml") -> Path:
        path = blog_repo / name
        path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
        return path

    return _write
