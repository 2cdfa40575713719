"""Notebook root collection and notebook aliases."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Mapping, Sequence

from neogrove.aliases.matching import prefix_matches
from neogrove.config import expand_path
from neogrove.constants import DEFAULT_NOTEBOOK, NOTEBOOK_ALIAS_PREFIX
from neogrove.errors import PathExpansionError

_module_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotebookRoot:
    name: str
    root_dir: str


def collect_notebook_roots(
    definitions: Mapping[str, str] | None,
    logger: logging.Logger | None = None,
) -> list[NotebookRoot]:
    """Expand configured notebook roots, most specific (longest) first.

    A notebook whose root cannot be expanded is skipped; the others are kept.
    """
    log = logger or _module_logger
    roots: list[NotebookRoot] = []
    for name, raw_root in (definitions or {}).items():
        if not raw_root:
            continue
        try:
            roots.append(NotebookRoot(name=name, root_dir=expand_path(raw_root)))
        except PathExpansionError as exc:
            log.warning("Skipping notebook %r: %s", name, exc)
    roots.sort(key=lambda nb: (-len(nb.root_dir), nb.root_dir, nb.name))
    return roots


def format_notebook_alias(name: str, relative_path: str) -> str:
    # The default notebook omits its name to keep older aliases valid
    if name == DEFAULT_NOTEBOOK:
        return f"{NOTEBOOK_ALIAS_PREFIX}{relative_path}"
    return f"{NOTEBOOK_ALIAS_PREFIX}{name}:{relative_path}"


def notebook_alias(path: str, roots: Sequence[NotebookRoot]) -> tuple[str, bool]:
    """Alias `path` against the most specific containing notebook root.

    A root that yields no relative path is passed over for the next shorter
    one. Returns `(alias, True)` on a match and `(path, False)` otherwise.
    """
    for match in prefix_matches(roots, path, key=lambda nb: nb.root_dir):
        try:
            relative = os.path.relpath(path, match.root_dir)
        except ValueError:
            continue
        return format_notebook_alias(match.name, PurePath(relative).as_posix()), True
    return path, False
