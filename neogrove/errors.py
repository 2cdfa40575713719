"""Structured error classification."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    CONFIGURATION = "config"
    DISCOVERY = "discovery"
    INPUT = "input"
    OUTPUT = "output"
    DELEGATION = "delegation"
    FILESYSTEM = "filesystem"
    UNKNOWN = "unknown"


class NeogroveError(Exception):
    """Base class for errors that end a command with a message."""

    category = ErrorCategory.UNKNOWN

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "message": str(self),
        }


class ConfigError(NeogroveError):
    """Configuration could not be read or validated."""

    category = ErrorCategory.CONFIGURATION


class PathExpansionError(ConfigError):
    """A configured path contains a placeholder that cannot be expanded."""


class DiscoveryError(NeogroveError):
    """Workspace discovery failed."""

    category = ErrorCategory.DISCOVERY


class InputReadError(NeogroveError):
    """Reading the input stream failed."""

    category = ErrorCategory.INPUT


class OutputError(NeogroveError):
    """Command output could not be produced."""

    category = ErrorCategory.OUTPUT


class FlowNotFoundError(NeogroveError):
    """The delegated executable is not on PATH."""

    category = ErrorCategory.DELEGATION


class FlowCommandError(NeogroveError):
    """The delegated executable exited with a non-zero code."""

    category = ErrorCategory.DELEGATION

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["returncode"] = self.returncode
        return data


class TextAppendError(NeogroveError):
    """Appending to a target note failed."""

    category = ErrorCategory.FILESYSTEM
