"""Repo discovery — lazily walk a tree and pick out git repositories."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

MARKER = ".git"


@dataclass(frozen=True)
class DirectoryEntry:
    path: str
    is_dir: bool


def is_repository(path: str) -> bool:
    """True if ``path`` has a ``.git`` directory directly beneath it.

    A symlink counts only when it resolves to a directory. Any error on the
    check (permission denied, path vanished) reads as "not a repository".
    """
    try:
        return os.path.isdir(os.path.join(path, MARKER))
    except (OSError, ValueError):
        return False


def walk(root: str) -> Iterator[DirectoryEntry]:
    """Yield one entry for root and every filesystem object beneath it.

    Order is unspecified. Unreadable directories are yielded but their
    contents are skipped. Symlinked directories are reported, never entered.
    Nothing is pruned below a repository, so nested repos still show up.
    """
    root = os.path.abspath(os.path.expanduser(root))
    yield DirectoryEntry(root, os.path.isdir(root))

    pending = [root]
    while pending:
        path = pending.pop()
        try:
            entries = list(os.scandir(path))
        except (PermissionError, OSError) as exc:
            logger.debug("Skipping unreadable directory %s: %s", path, exc)
            continue

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except (PermissionError, OSError):
                is_dir = False
            yield DirectoryEntry(entry.path, is_dir)
            if is_dir:
                pending.append(entry.path)


def find_repos(root: str) -> Iterator[str]:
    """Lazily yield the path of every git repository under root, root included."""
    for entry in walk(root):
        if entry.is_dir and is_repository(entry.path):
            yield entry.path
