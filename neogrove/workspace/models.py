"""Workspace discovery data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from neogrove.constants import KIND_PROJECT
from neogrove.errors import DiscoveryError


@dataclass(frozen=True)
class WorkspaceNode:
    path: str
    identifier: str
    name: str = ""
    kind: str = KIND_PROJECT

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "identifier": self.identifier,
            "name": self.name,
            "kind": self.kind,
        }


@dataclass
class Project:
    name: str
    path: str
    workspaces: list[WorkspaceNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "workspaces": [ws.to_dict() for ws in self.workspaces],
        }


@dataclass
class DiscoveryResult:
    projects: list[Project] = field(default_factory=list)

    def iter_workspaces(self) -> Iterator[WorkspaceNode]:
        for project in self.projects:
            yield from project.workspaces

    def to_dict(self) -> dict:
        return {"projects": [project.to_dict() for project in self.projects]}

    @classmethod
    def from_dict(cls, data: Any) -> "DiscoveryResult":
        """Build a result from `{"projects": [{"workspaces": [...]}]}`."""
        if not isinstance(data, dict) or not isinstance(data.get("projects", []), list):
            raise DiscoveryError("Discovery data must be an object with a 'projects' list")
        projects: list[Project] = []
        for raw_project in data.get("projects", []):
            if not isinstance(raw_project, dict):
                raise DiscoveryError(f"Invalid project entry: {raw_project!r}")
            workspaces: list[WorkspaceNode] = []
            for raw_ws in raw_project.get("workspaces", []):
                try:
                    workspaces.append(WorkspaceNode(
                        path=raw_ws["path"],
                        identifier=raw_ws["identifier"],
                        name=raw_ws.get("name", ""),
                        kind=raw_ws.get("kind", KIND_PROJECT),
                    ))
                except (KeyError, TypeError, AttributeError) as exc:
                    raise DiscoveryError(f"Invalid workspace entry: {raw_ws!r}") from exc
            first_path = workspaces[0].path if workspaces else ""
            projects.append(Project(
                name=raw_project.get("name", ""),
                path=raw_project.get("path", first_path),
                workspaces=workspaces,
            ))
        return cls(projects=projects)
