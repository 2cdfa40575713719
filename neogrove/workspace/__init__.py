"""
Workspace discovery and lookup.
"""

from neogrove.workspace.discovery import DiscoveryService, load_discovery_file
from neogrove.workspace.models import DiscoveryResult, Project, WorkspaceNode
from neogrove.workspace.provider import WorkspaceProvider

__all__ = [
    "DiscoveryResult",
    "DiscoveryService",
    "Project",
    "WorkspaceNode",
    "WorkspaceProvider",
    "load_discovery_file",
]
