"""
Workspace discovery over configured grove search paths.
"""

from __future__ import annotations

import glob
import json
import logging
import os
from pathlib import Path
from typing import Iterable

import yaml

from neogrove.config import NeogroveConfig, expand_path
from neogrove.constants import (
    IDENTIFIER_SEPARATOR,
    KIND_ECOSYSTEM,
    KIND_PROJECT,
    KIND_SUBPROJECT,
    KIND_WORKTREE,
    LOCAL_CONFIG_NAME,
    PROJECT_MARKERS,
    WORKTREES_DIR,
)
from neogrove.errors import DiscoveryError, PathExpansionError
from neogrove.workspace.models import DiscoveryResult, Project, WorkspaceNode


def _is_project_dir(path: str) -> bool:
    return any(os.path.exists(os.path.join(path, marker)) for marker in PROJECT_MARKERS)


def _iter_child_dirs(root: str) -> Iterable[str]:
    """Yield non-hidden child directories of root in name order."""
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            yield entry.path


def _join_identifier(*parts: str) -> str:
    return IDENTIFIER_SEPARATOR.join(parts)


def _read_project_config(project_dir: str) -> dict:
    config_file = os.path.join(project_dir, LOCAL_CONFIG_NAME)
    if not os.path.isfile(config_file):
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise DiscoveryError(f"Failed to read {config_file}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _ecosystem_patterns(project_config: dict) -> list[str]:
    patterns = project_config.get("workspaces") or []
    if isinstance(patterns, str):
        return [patterns]
    return [p for p in patterns if isinstance(p, str)]


def _iter_subprojects(root: str, patterns: list[str]) -> Iterable[str]:
    seen: set[str] = set()
    for pattern in patterns:
        for match in sorted(glob.glob(os.path.join(root, pattern))):
            match = os.path.abspath(match)
            if match in seen or match == root:
                continue
            if os.path.isdir(match) and _is_project_dir(match):
                seen.add(match)
                yield match


class DiscoveryService:
    """Discovers projects, ecosystems and worktrees under grove search paths."""

    def __init__(self, config: NeogroveConfig, logger: logging.Logger | None = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def discover_all(self) -> DiscoveryResult:
        projects: list[Project] = []
        for grove_name, grove in self.config.groves.items():
            if not grove.enabled:
                self.logger.debug("Skipping disabled grove %s", grove_name)
                continue
            try:
                grove_root = expand_path(grove.path)
            except PathExpansionError as exc:
                raise DiscoveryError(f"Grove {grove_name!r}: {exc}") from exc
            if not os.path.isdir(grove_root):
                self.logger.warning("Grove %s path does not exist: %s", grove_name, grove_root)
                continue
            for child in _iter_child_dirs(grove_root):
                if _is_project_dir(child):
                    projects.append(self._discover_project(child))
        self.logger.debug("Discovered %d projects", len(projects))
        return DiscoveryResult(projects=projects)

    def _discover_project(self, project_dir: str) -> Project:
        name = os.path.basename(project_dir)
        patterns = _ecosystem_patterns(_read_project_config(project_dir))
        kind = KIND_ECOSYSTEM if patterns else KIND_PROJECT
        project = Project(name=name, path=project_dir)
        project.workspaces.append(
            WorkspaceNode(path=project_dir, identifier=name, name=name, kind=kind)
        )
        for sub_dir in _iter_subprojects(project_dir, patterns):
            sub_name = os.path.basename(sub_dir)
            project.workspaces.append(WorkspaceNode(
                path=sub_dir,
                identifier=_join_identifier(name, sub_name),
                name=sub_name,
                kind=KIND_SUBPROJECT,
            ))

        worktrees_root = os.path.join(project_dir, WORKTREES_DIR)
        for worktree_dir in _iter_child_dirs(worktrees_root):
            worktree_name = os.path.basename(worktree_dir)
            project.workspaces.append(WorkspaceNode(
                path=worktree_dir,
                identifier=_join_identifier(name, worktree_name),
                name=worktree_name,
                kind=KIND_WORKTREE,
            ))
            for sub_dir in _iter_subprojects(worktree_dir, patterns):
                sub_name = os.path.basename(sub_dir)
                project.workspaces.append(WorkspaceNode(
                    path=sub_dir,
                    identifier=_join_identifier(name, worktree_name, sub_name),
                    name=sub_name,
                    kind=KIND_SUBPROJECT,
                ))
        self.logger.debug("Project %s: %d workspaces", name, len(project.workspaces))
        return project


def load_discovery_file(path: str | Path) -> DiscoveryResult:
    """Load a pre-built discovery result from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise DiscoveryError(f"Failed to load discovery file {path}: {exc}") from exc
    return DiscoveryResult.from_dict(data)
