"""Appending editor selections and questions to markdown notes."""

from __future__ import annotations

import os
from pathlib import Path

from neogrove.errors import TextAppendError

_FILE_MODE = 0o644


def format_selection(code: str, language: str = "") -> str:
    return f"\n\n```{language}\n{code}\n```\n"


def format_question(question: str) -> str:
    return f"\n\n{question}\n"


def _append(target: str | Path, text: str) -> None:
    try:
        fd = os.open(target, os.O_APPEND | os.O_CREAT | os.O_WRONLY, _FILE_MODE)
    except OSError as exc:
        raise TextAppendError(f"failed to open target file {target}: {exc}") from exc
    try:
        with os.fdopen(fd, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        raise TextAppendError(f"failed to write to target file {target}: {exc}") from exc


def append_selection(target: str | Path, code: str, language: str = "") -> None:
    """Append `code` to `target` as a fenced code block."""
    _append(target, format_selection(code, language))


def append_question(target: str | Path, question: str) -> None:
    """Append `question` to `target` as its own paragraph."""
    _append(target, format_question(question))
