"""
Exceptions raised while validating and running a scaffold request.
"""

from __future__ import annotations

from typing import Sequence


class ScaffoldError(RuntimeError):
    """Base class for scaffolding failures that end the run."""


class MissingArgumentError(ScaffoldError):
    """Raised when a required command-line parameter was not supplied."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class InvalidSlugError(ScaffoldError):
    """Raised when a slug cannot be used safely as a path and branch name."""

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        self.reason = reason
        super().__init__(f"Invalid slug {slug!r}: {reason}")


class ExternalCommandError(ScaffoldError):
    """Raised when git or hugo exits with a non-zero status (or cannot start)."""

    def __init__(self, step: str, argv: Sequence[str], returncode: int):
        self.step = step
        self.argv = tuple(argv)
        self.returncode = returncode
        command = " ".join(self.argv)
        super().__init__(f"Step '{step}' failed (exit {returncode}): {command}")
