"""Concurrent dispatch — fan repositories out to a bounded thread pool."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Optional, Protocol

from rich.console import Console

from grpr.git import Outcome, RepositoryAction
from grpr.scanner import find_repos
from grpr.theme import failure_line, repo_line, summary_line

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    def announce(self, path: str) -> None: ...

    def failure(self, outcome: Outcome) -> None: ...


class ConsoleReporter:
    """Announcements to stdout, failures and the summary to stderr."""

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None):
        self.out = out or Console()
        self.err = err or Console(stderr=True)

    def announce(self, path: str) -> None:
        self.out.print(repo_line(path), soft_wrap=True)

    def failure(self, outcome: Outcome) -> None:
        self.err.print(failure_line(outcome.error or ""), soft_wrap=True)

    def summary(self, outcomes: list[Outcome]) -> None:
        failed = sum(1 for o in outcomes if not o.ok)
        self.err.print(summary_line(len(outcomes), failed), soft_wrap=True)


def default_workers() -> int:
    """One worker per CPU the interpreter can see."""
    return os.cpu_count() or 1


class Dispatcher:
    """Runs a RepositoryAction in every repository found under a root.

    ``workers`` of None or 0 means one worker per CPU. A failing repository
    is reported and counted but never stops the others.
    """

    def __init__(
        self,
        action: RepositoryAction,
        workers: Optional[int] = None,
        reporter: Optional[Reporter] = None,
    ):
        if workers is not None and workers < 0:
            raise ValueError(f"worker count must not be negative, got {workers}")
        self.action = action
        self.workers = workers or default_workers()
        self.reporter = reporter or ConsoleReporter()

    def _report(self, method: str, arg) -> None:
        # Sink errors (e.g. stdout piped into `head`) never change the outcome
        try:
            getattr(self.reporter, method)(arg)
        except Exception:
            logger.debug("Reporter %s failed", method, exc_info=True)

    def _process(self, path: str) -> Outcome:
        self._report("announce", path)
        try:
            outcome = self.action.run(path)
        except Exception as exc:
            logger.debug("Action raised in %s", path, exc_info=True)
            outcome = Outcome(path, f"unexpected error in {path}: {exc}")
        if not outcome.ok:
            self._report("failure", outcome)
        return outcome

    def dispatch(self, root: str) -> list[Outcome]:
        """Process every repository under root; block until all are done.

        Outcomes come back in completion order. On KeyboardInterrupt,
        repositories not yet started are dropped, running git processes are
        waited on, and the interrupt is re-raised.
        """
        logger.debug("Dispatching %s under %s with %d workers", self.action.label, root, self.workers)
        pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="grpr")
        futures: list[Future[Outcome]] = []
        try:
            for path in find_repos(root):
                futures.append(pool.submit(self._process, path))
            return [f.result() for f in as_completed(futures)]
        except KeyboardInterrupt:
            logger.debug("Interrupted; cancelling pending repositories")
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        finally:
            pool.shutdown(wait=True)
