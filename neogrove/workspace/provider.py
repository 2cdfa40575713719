"""Direct path lookup over a discovery result."""

from __future__ import annotations

import logging
import os
from typing import Optional

from neogrove.workspace.models import DiscoveryResult, WorkspaceNode

logger = logging.getLogger(__name__)


class WorkspaceProvider:
    """Read-only index from workspace path to node.

    Built once per run and never mutated afterwards.
    """

    def __init__(self, discovery: DiscoveryResult):
        self._by_path: dict[str, WorkspaceNode] = {}
        for node in discovery.iter_workspaces():
            existing = self._by_path.setdefault(node.path, node)
            if existing is not node:
                logger.debug(
                    "Duplicate workspace path %s (%s); keeping %s",
                    node.path,
                    node.identifier,
                    existing.identifier,
                )

    def __len__(self) -> int:
        return len(self._by_path)

    def get(self, path: str) -> Optional[WorkspaceNode]:
        """Exact lookup of a workspace root."""
        return self._by_path.get(path)

    def find_by_path(self, path: str) -> Optional[WorkspaceNode]:
        """Return the deepest workspace containing `path`.

        Checks `path` itself, then each ancestor directory, against the index.
        """
        current = path
        while current:
            node = self.get(current)
            if node is not None:
                return node
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return None
