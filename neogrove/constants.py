"""
Shared constants for neogrove.
"""

# Delegation
DEFAULT_FLOW_COMMAND = "flow"

# Configuration discovery
CONFIG_ENV_VAR = "NEOGROVE_CONFIG"
LOG_LEVEL_ENV_VAR = "NEOGROVE_LOG_LEVEL"
LOCAL_CONFIG_NAME = "grove.yml"
DEFAULT_LOG_LEVEL = "WARNING"

# Workspace discovery
PROJECT_MARKERS = ("grove.yml", ".git")
WORKTREES_DIR = ".grove-worktrees"

# Alias grammar
ALIAS_PREFIX = "@a:"
NOTEBOOK_ALIAS_PREFIX = f"{ALIAS_PREFIX}nb:"
DEFAULT_NOTEBOOK = "default"
IDENTIFIER_SEPARATOR = "_"
ALIAS_NAMESPACE_SEPARATOR = ":"

# Workspace kinds
KIND_PROJECT = "project"
KIND_ECOSYSTEM = "ecosystem"
KIND_WORKTREE = "worktree"
KIND_SUBPROJECT = "subproject"
