"""Tests for running git in a repository."""

import os
import subprocess
import tempfile

import pytest

from grpr.git import (
    ExecutionError,
    GitExecutor,
    NonZeroExit,
    Outcome,
    RepositoryAction,
    SpawnFailed,
)


class FakeExecutor:
    """Records calls; fails in any directory whose name is in ``failing``."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def execute(self, working_directory, command):
        self.calls.append((working_directory, tuple(command)))
        if os.path.basename(working_directory) in self.failing:
            raise NonZeroExit(1)


def test_execute_success():
    with tempfile.TemporaryDirectory() as tmp:
        GitExecutor().execute(tmp, ["--version"])


def test_execute_runs_in_working_directory():
    with tempfile.TemporaryDirectory() as tmp:
        repo = os.path.join(tmp, "repo")
        subprocess.run(["git", "init", repo], capture_output=True)
        # Fails outside a repository, so success proves cwd was honoured
        GitExecutor().execute(repo, ["rev-parse", "--git-dir"])


def test_execute_nonzero_exit():
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(NonZeroExit) as exc_info:
            GitExecutor().execute(tmp, ["definitely-not-a-git-command"])
        assert exc_info.value.returncode != 0


def test_execute_spawn_failed():
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(SpawnFailed):
            GitExecutor(binary="/nonexistent/git").execute(tmp, ["status"])


def test_execute_arguments_not_shell_interpreted():
    with tempfile.TemporaryDirectory() as tmp:
        repo = os.path.join(tmp, "repo")
        subprocess.run(["git", "init", repo], capture_output=True)
        GitExecutor().execute(repo, ["config", "grpr.test", "a; touch pwned"])
        out = subprocess.run(
            ["git", "-C", repo, "config", "grpr.test"], capture_output=True, text=True
        )
        assert out.stdout.strip() == "a; touch pwned"
        assert not os.path.exists(os.path.join(repo, "pwned"))


def test_execution_errors_share_base():
    assert issubclass(SpawnFailed, ExecutionError)
    assert issubclass(NonZeroExit, ExecutionError)
    assert "signal 9" in str(NonZeroExit(-9))


def test_action_rejects_empty_command():
    with pytest.raises(ValueError):
        RepositoryAction(())


def test_action_command_is_immutable_tuple():
    action = RepositoryAction(["pull", "origin", "main"], FakeExecutor())
    assert action.command == ("pull", "origin", "main")
    assert action.label == "git pull origin main"


def test_action_run_ok():
    fake = FakeExecutor()
    action = RepositoryAction(("status",), fake)
    assert action.run("/work/a") == Outcome("/work/a")
    assert fake.calls == [("/work/a", ("status",))]


def test_action_run_error_names_path():
    action = RepositoryAction(("status",), FakeExecutor(failing={"c"}))
    outcome = action.run("/work/c")
    assert not outcome.ok
    assert "/work/c" in outcome.error
    assert "status 1" in outcome.error


def test_action_run_real_git_failure():
    with tempfile.TemporaryDirectory() as tmp:
        outcome = RepositoryAction(("definitely-not-a-git-command",)).run(tmp)
        assert not outcome.ok
        assert tmp in outcome.error


def test_action_run_real_git_version():
    with tempfile.TemporaryDirectory() as tmp:
        assert RepositoryAction(("--version",)).run(tmp).ok
