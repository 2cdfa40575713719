"""
Path-to-alias resolution.

Absolute paths become `@a:nb:...` notebook aliases or `@a:<workspace>/...`
workspace aliases; anything else is passed through unchanged.
"""

from neogrove.aliases.normalize import PathNormalizer, filesystem_is_case_insensitive
from neogrove.aliases.notebooks import NotebookRoot, collect_notebook_roots, notebook_alias
from neogrove.aliases.resolver import AliasResolver
from neogrove.aliases.workspaces import find_workspace_by_path, workspace_alias

__all__ = [
    "AliasResolver",
    "NotebookRoot",
    "PathNormalizer",
    "collect_notebook_roots",
    "filesystem_is_case_insensitive",
    "find_workspace_by_path",
    "notebook_alias",
    "workspace_alias",
]
