"""Longest-prefix matching on directory boundaries."""

from __future__ import annotations

import os
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

_SEPARATORS = tuple({"/", os.sep})


def has_path_prefix(path: str, root: str) -> bool:
    """Check whether `path` is `root` or lies inside it.

    `/a/b` is a prefix of `/a/b` and `/a/b/c`, never of `/a/bc`.
    """
    if not root or not path.startswith(root):
        return False
    if len(path) == len(root):
        return True
    if root.endswith(_SEPARATORS):
        return True
    return path[len(root)] in _SEPARATORS


def prefix_matches(
    candidates: Iterable[T],
    path: str,
    key: Callable[[T], str],
    normalize: Optional[Callable[[str], str]] = None,
) -> list[T]:
    """Return every candidate whose key is a directory prefix of `path`.

    Ordered most specific first: longer keys before shorter ones, and
    equal-length keys by their lexicographically smallest raw value.
    When `normalize` is given, both sides are compared in normalized form.
    """
    norm = normalize or (lambda value: value)
    target = norm(path)
    ranked: list[tuple[int, str, int, T]] = []
    for index, candidate in enumerate(candidates):
        raw = key(candidate)
        normalized = norm(raw)
        if has_path_prefix(target, normalized):
            ranked.append((-len(normalized), raw, index, candidate))
    ranked.sort(key=lambda entry: entry[:3])
    return [entry[3] for entry in ranked]


def longest_prefix_match(
    candidates: Iterable[T],
    path: str,
    key: Callable[[T], str],
    normalize: Optional[Callable[[str], str]] = None,
) -> Optional[T]:
    """Return the candidate whose key is the longest directory prefix of `path`."""
    matches = prefix_matches(candidates, path, key, normalize)
    return matches[0] if matches else None
