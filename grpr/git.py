"""Git invocation — run one command in one repository, report the outcome."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

GIT = "git"


class ExecutionError(Exception):
    """Base class for a git invocation that did not succeed."""


class SpawnFailed(ExecutionError):
    """The git process could not be started at all."""

    def __init__(self, cause: OSError):
        self.cause = cause
        super().__init__(f"could not start git: {cause}")


class NonZeroExit(ExecutionError):
    """git ran to completion but exited with a non-zero status."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        if returncode < 0:
            msg = f"git was killed by signal {-returncode}"
        else:
            msg = f"git exited with status {returncode}"
        super().__init__(msg)


class Executor(Protocol):
    def execute(self, working_directory: str, command: Sequence[str]) -> None: ...


@dataclass(frozen=True)
class GitExecutor:
    """Runs the git binary with the parent's stdin, stdout and stderr.

    Arguments go to git as an argv list; no shell is involved.
    """

    binary: str = GIT

    def execute(self, working_directory: str, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("git command must not be empty")
        try:
            result = subprocess.run([self.binary, *command], cwd=working_directory)
        except OSError as exc:
            raise SpawnFailed(exc) from exc
        if result.returncode != 0:
            raise NonZeroExit(result.returncode)


@dataclass(frozen=True)
class Outcome:
    path: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RepositoryAction:
    """A fixed git command bound to an executor, applied one repo at a time."""

    command: tuple[str, ...]
    executor: Executor = field(default_factory=GitExecutor)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable copy shared by workers
        object.__setattr__(self, "command", tuple(self.command))
        if not self.command:
            raise ValueError("git command must not be empty")

    @property
    def label(self) -> str:
        return " ".join((GIT, *self.command))

    def run(self, repo_path: str) -> Outcome:
        """Run the command in repo_path; failures come back as a failed Outcome."""
        start = time.monotonic()
        try:
            self.executor.execute(repo_path, self.command)
        except ExecutionError as exc:
            return Outcome(repo_path, f"{self.label} failed in {repo_path}: {exc}")
        finally:
            logger.debug("%s in %s took %.2fs", self.label, repo_path, time.monotonic() - start)
        return Outcome(repo_path)
