"""Workspace matching and workspace aliases."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Optional

from neogrove.aliases.matching import longest_prefix_match
from neogrove.aliases.normalize import PathNormalizer
from neogrove.constants import (
    ALIAS_NAMESPACE_SEPARATOR,
    ALIAS_PREFIX,
    IDENTIFIER_SEPARATOR,
)
from neogrove.workspace.models import DiscoveryResult, WorkspaceNode
from neogrove.workspace.provider import WorkspaceProvider


def find_workspace_by_path(
    provider: WorkspaceProvider,
    path: str,
    discovery: DiscoveryResult,
    normalizer: PathNormalizer,
) -> Optional[WorkspaceNode]:
    """Find the most specific workspace containing `path`.

    The provider index is tried with the path as given. Only when the
    normalizer folds case is every known workspace scanned as a fallback.
    """
    node = provider.find_by_path(path)
    if node is not None:
        return node

    if not normalizer.case_insensitive:
        return None

    best = longest_prefix_match(
        discovery.iter_workspaces(),
        path,
        key=lambda ws: ws.path,
        normalize=normalizer.normalize,
    )
    if best is None:
        return None
    # Re-resolve through the index so the stored node is returned
    return provider.find_by_path(best.path)


def _relative_posix(node: WorkspaceNode, path: str, normalizer: PathNormalizer) -> str:
    base_parts = PurePath(node.path).parts
    path_parts = PurePath(os.path.normpath(path)).parts
    count = len(base_parts)
    if len(path_parts) >= count and all(
        normalizer.normalize(a) == normalizer.normalize(b)
        for a, b in zip(base_parts, path_parts)
    ):
        # Shared prefix takes the workspace's own casing
        return "/".join(path_parts[count:]) or "."
    return PurePath(os.path.relpath(path, node.path)).as_posix()


def alias_namespace(identifier: str) -> str:
    """`eco_feature_sub` -> `eco:feature:sub`"""
    return identifier.replace(IDENTIFIER_SEPARATOR, ALIAS_NAMESPACE_SEPARATOR)


def workspace_alias(node: WorkspaceNode, path: str, normalizer: PathNormalizer) -> str:
    """Render `@a:<namespace>/<relative>` for `path` inside `node`.

    Raises ValueError when no relative path exists between the two.
    """
    relative = _relative_posix(node, path, normalizer)
    return f"{ALIAS_PREFIX}{alias_namespace(node.identifier)}/{relative}"
