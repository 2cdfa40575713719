"""
Configuration management for neogrove
"""

import os
import re
import json
import yaml
from dotenv import load_dotenv
from pathlib import Path
from typing import Dict, Optional
from pydantic import BaseModel, Field, ValidationError

from neogrove.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_FLOW_COMMAND,
    DEFAULT_LOG_LEVEL,
    LOCAL_CONFIG_NAME,
)
from neogrove.errors import ConfigError, PathExpansionError

DEFAULT_USER_CONFIG_PATH = Path.home() / ".config" / "grove" / "grove.yml"

_UNEXPANDED_VAR = re.compile(r"\$(\{[^}]*\}|[A-Za-z_][A-Za-z0-9_]*)")


class NotebookDefinition(BaseModel):
    """A named notebook rooted at a directory"""
    root_dir: str = ""


class NotebooksSettings(BaseModel):
    """Notebook definitions keyed by name"""
    definitions: Dict[str, NotebookDefinition] = Field(default_factory=dict)


class GroveSearchPath(BaseModel):
    """A directory scanned for projects during discovery"""
    path: str
    enabled: bool = True


class FlowSettings(BaseModel):
    """Settings for the delegated flow executable"""
    command: str = DEFAULT_FLOW_COMMAND


class PathSettings(BaseModel):
    """Path comparison settings"""
    # None means detect from the host platform
    case_insensitive: Optional[bool] = None


class LoggingSettings(BaseModel):
    level: str = DEFAULT_LOG_LEVEL


class NeogroveConfig(BaseModel):
    """Main neogrove configuration"""
    notebooks: NotebooksSettings = Field(default_factory=NotebooksSettings)
    groves: Dict[str, GroveSearchPath] = Field(default_factory=dict)
    flow: FlowSettings = Field(default_factory=FlowSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def notebook_roots(self) -> Dict[str, str]:
        """Notebook name to raw (unexpanded) root directory."""
        return {
            name: definition.root_dir
            for name, definition in self.notebooks.definitions.items()
        }


def expand_path(raw: str) -> str:
    """
    Expand `~`, `~user` and environment variables, then make the path absolute.

    Raises PathExpansionError when a placeholder is left unresolved.
    """
    expanded = os.path.expandvars(os.path.expanduser(raw))
    if expanded.startswith("~"):
        raise PathExpansionError(f"Cannot expand home directory in path: {raw}")
    unresolved = _UNEXPANDED_VAR.search(expanded)
    if unresolved:
        raise PathExpansionError(
            f"Environment variable {unresolved.group(0)} is not set in path: {raw}"
        )
    return os.path.abspath(expanded)


def _layered_paths() -> list[Path]:
    """Config files merged in order, later files overriding earlier ones."""
    layers = [DEFAULT_USER_CONFIG_PATH, Path.cwd() / LOCAL_CONFIG_NAME]
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        layers.append(Path(env_path).expanduser())
    return layers


def _deep_merge(base: dict, update: dict) -> dict:
    """Mappings merge recursively; any other value in `update` replaces."""
    result = base.copy()
    for key, value in update.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping at the top level")
    return data


def load_config(config_path: Optional[Path] = None) -> NeogroveConfig:
    """
    Load configuration from YAML files or use defaults.

    An explicit config_path is read on its own. Otherwise these layers are
    deep-merged, later ones winning:
    1. ~/.config/grove/grove.yml
    2. ./grove.yml
    3. $NEOGROVE_CONFIG
    Missing layers are skipped; no file at all means defaults.
    """
    config_data: dict = {}

    # Load environment variables from .env (if present)
    load_dotenv()

    if config_path:
        if not Path(config_path).exists():
            raise ConfigError(f"Config file not found: {config_path}")
        config_data = _read_config_file(Path(config_path))
    else:
        for path in _layered_paths():
            if path.exists():
                config_data = _deep_merge(config_data, _read_config_file(path))

    try:
        return NeogroveConfig(**config_data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
