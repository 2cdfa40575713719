"""
Delegation of editor commands to the `flow` executable.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Sequence

from neogrove.constants import DEFAULT_FLOW_COMMAND
from neogrove.errors import FlowCommandError, FlowNotFoundError

logger = logging.getLogger(__name__)


class FlowRunner:
    """Runs `flow` with stdio wired straight through to the caller."""

    def __init__(self, command: str = DEFAULT_FLOW_COMMAND):
        self.command = command

    def _not_found_message(self) -> str:
        return (
            f"'{self.command}' command not found in PATH. "
            "Please ensure the grove-flow binary is installed and accessible"
        )

    def build_command(self, *args: str) -> list[str]:
        return [self.command, *args]

    def run(self, *args: str) -> None:
        executable = shutil.which(self.command)
        if executable is None:
            logger.error("'%s' command not found in PATH", self.command)
            raise FlowNotFoundError(self._not_found_message())

        cmd = self.build_command(*args)
        logger.debug("Executing %s", " ".join(cmd))
        try:
            # stdin/stdout/stderr are inherited so the editor terminal sees output live
            result = subprocess.run(cmd)
        except FileNotFoundError as exc:
            raise FlowNotFoundError(self._not_found_message()) from exc
        except OSError as exc:
            raise FlowCommandError(f"{self.command} command failed: {exc}") from exc

        if result.returncode != 0:
            logger.error("%s exited with code %d", " ".join(cmd), result.returncode)
            raise FlowCommandError(f"{self.command} command failed", result.returncode)


def passthrough_args(extra: Sequence[str], flags_only: bool = False) -> list[str]:
    """Select trailing CLI arguments to forward to `flow`."""
    if flags_only:
        return [arg for arg in extra if arg.startswith("-")]
    return list(extra)
