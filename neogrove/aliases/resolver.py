"""
Batch conversion of absolute paths to aliases.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, TextIO

from neogrove.aliases.normalize import PathNormalizer
from neogrove.aliases.notebooks import NotebookRoot, notebook_alias
from neogrove.aliases.workspaces import find_workspace_by_path, workspace_alias
from neogrove.errors import InputReadError
from neogrove.workspace.models import DiscoveryResult
from neogrove.workspace.provider import WorkspaceProvider

_module_logger = logging.getLogger(__name__)


class AliasResolver:
    """Resolves paths against notebooks first, then workspaces.

    Every input path gets exactly one entry; unmatched paths map to themselves.
    """

    def __init__(
        self,
        provider: WorkspaceProvider,
        discovery: DiscoveryResult,
        notebooks: Sequence[NotebookRoot] = (),
        normalizer: PathNormalizer | None = None,
        logger: logging.Logger | None = None,
    ):
        self.provider = provider
        self.discovery = discovery
        self.notebooks = list(notebooks)
        self.normalizer = normalizer or PathNormalizer()
        self.logger = logger or _module_logger

    def resolve(self, path: str) -> str:
        alias, matched = notebook_alias(path, self.notebooks)
        if matched:
            return alias

        node = find_workspace_by_path(self.provider, path, self.discovery, self.normalizer)
        if node is None:
            return path
        try:
            return workspace_alias(node, path, self.normalizer)
        except ValueError as exc:
            self.logger.debug("No relative path for %s in %s: %s", path, node.path, exc)
            return path

    def resolve_lines(self, lines: Iterable[str]) -> dict[str, str]:
        """Resolve every non-empty line; the mapping is returned once input ends."""
        results: dict[str, str] = {}
        try:
            for line in lines:
                path = line.rstrip("\r\n")
                if not path:
                    continue
                results[path] = self.resolve(path)
        except OSError as exc:
            raise InputReadError(f"error reading input: {exc}") from exc
        self.logger.debug("Resolved %d paths", len(results))
        return results

    def resolve_stream(self, stream: TextIO) -> dict[str, str]:
        return self.resolve_lines(stream)
