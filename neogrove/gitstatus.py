"""
Extended git status for the editor statusline.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path

import pygit2


_INDEX_FLAGS = (
    pygit2.GIT_STATUS_INDEX_NEW
    | pygit2.GIT_STATUS_INDEX_MODIFIED
    | pygit2.GIT_STATUS_INDEX_DELETED
    | pygit2.GIT_STATUS_INDEX_RENAMED
    | pygit2.GIT_STATUS_INDEX_TYPECHANGE
)
_WT_FLAGS = (
    pygit2.GIT_STATUS_WT_NEW
    | pygit2.GIT_STATUS_WT_MODIFIED
    | pygit2.GIT_STATUS_WT_DELETED
    | pygit2.GIT_STATUS_WT_RENAMED
    | pygit2.GIT_STATUS_WT_TYPECHANGE
    | pygit2.GIT_STATUS_WT_UNREADABLE
)
_WT_NON_NEW = _WT_FLAGS & ~pygit2.GIT_STATUS_WT_NEW


@dataclass
class ExtendedStatus:
    repo_root: str = ""
    branch: str = ""
    head: str = ""
    detached: bool = False
    has_upstream: bool = False
    upstream: str = ""
    ahead_count: int = 0
    behind_count: int = 0
    staged_count: int = 0
    modified_count: int = 0
    untracked_count: int = 0
    conflicted_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    is_dirty: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def _open_repo(path: str | Path) -> pygit2.Repository:
    start = os.path.abspath(path)
    if os.path.isfile(start):
        start = os.path.dirname(start)
    repo_path = pygit2.discover_repository(start)
    if repo_path is None:
        raise ValueError(f"No git repository found for {path}")
    return pygit2.Repository(repo_path)


def _count_changes(repo: pygit2.Repository, status: ExtendedStatus) -> None:
    for flags in repo.status().values():
        if flags & pygit2.GIT_STATUS_CONFLICTED:
            status.conflicted_count += 1
            continue
        if flags & _INDEX_FLAGS:
            status.staged_count += 1
        if flags & pygit2.GIT_STATUS_WT_NEW and not (flags & _INDEX_FLAGS):
            status.untracked_count += 1
        elif flags & _WT_NON_NEW:
            status.modified_count += 1


def _fill_tracking(repo: pygit2.Repository, status: ExtendedStatus) -> None:
    if status.detached or not status.branch:
        return
    branch = repo.branches.local.get(status.branch)
    if branch is None:
        return
    upstream = branch.upstream
    if upstream is None:
        return
    status.has_upstream = True
    status.upstream = upstream.shorthand
    ahead, behind = repo.ahead_behind(branch.target, upstream.target)
    status.ahead_count = ahead
    status.behind_count = behind


def get_extended_status(path: str | Path) -> ExtendedStatus:
    """
    Collect branch, tracking and change counts for the repository at `path`.

    Raises ValueError when `path` is not inside a git repository.
    """
    repo = _open_repo(path)
    status = ExtendedStatus(
        repo_root=str(Path(repo.workdir).resolve()) if repo.workdir else "",
    )

    if repo.head_is_unborn:
        status.branch = repo.references["HEAD"].target.removeprefix("refs/heads/")
    else:
        head = repo.head
        status.detached = repo.head_is_detached
        status.branch = head.shorthand if not status.detached else "HEAD"
        status.head = str(head.target)
        _fill_tracking(repo, status)
        stats = repo.diff("HEAD").stats
        status.lines_added = stats.insertions
        status.lines_deleted = stats.deletions

    _count_changes(repo, status)
    status.is_dirty = bool(
        status.staged_count
        or status.modified_count
        or status.untracked_count
        or status.conflicted_count
    )
    return status
