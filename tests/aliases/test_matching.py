from dataclasses import dataclass

import pytest

from neogrove.aliases.matching import has_path_prefix, longest_prefix_match, prefix_matches


@dataclass(frozen=True)
class Root:
    path: str


@pytest.mark.parametrize(
    "path,root,expected",
    [
        ("/a/b", "/a/b", True),
        ("/a/b/c.txt", "/a/b", True),
        ("/a/bc/d", "/a/b", False),
        ("/a/b-extra/x.go", "/a/b", False),
        ("/a", "/a/b", False),
        ("/anything", "/", True),
        ("/a/b/c", "", False),
    ],
)
def test_has_path_prefix(path, root, expected):
    assert has_path_prefix(path, root) is expected


def test_longest_prefix_match_prefers_deepest_root():
    roots = [Root("/home/u/notes"), Root("/home/u/notes/sub"), Root("/home/u")]
    match = longest_prefix_match(roots, "/home/u/notes/sub/a.md", key=lambda r: r.path)
    assert match == Root("/home/u/notes/sub")


def test_longest_prefix_match_is_order_independent():
    roots = [Root("/home/u"), Root("/home/u/notes/sub"), Root("/home/u/notes")]
    for ordering in (roots, list(reversed(roots))):
        match = longest_prefix_match(ordering, "/home/u/notes/sub/a.md", key=lambda r: r.path)
        assert match.path == "/home/u/notes/sub"


def test_longest_prefix_match_respects_directory_boundary():
    roots = [Root("/proj/app")]
    assert longest_prefix_match(roots, "/proj/app/x.go", key=lambda r: r.path) == Root("/proj/app")
    assert longest_prefix_match(roots, "/proj/app-extra/x.go", key=lambda r: r.path) is None


def test_longest_prefix_match_equal_length_tie_is_deterministic():
    """Two candidates normalizing to the same root resolve to the smallest raw path."""
    roots = [Root("/Work/App"), Root("/work/app"), Root("/WORK/APP")]
    for ordering in (roots, list(reversed(roots))):
        match = longest_prefix_match(
            ordering,
            "/work/app/main.go",
            key=lambda r: r.path,
            normalize=str.lower,
        )
        assert match == Root("/WORK/APP")


def test_longest_prefix_match_uses_normalize_on_both_sides():
    roots = [Root("/Users/me/Proj")]
    assert longest_prefix_match(roots, "/users/me/proj/file.go", key=lambda r: r.path) is None
    match = longest_prefix_match(
        roots,
        "/users/me/proj/file.go",
        key=lambda r: r.path,
        normalize=str.lower,
    )
    assert match == Root("/Users/me/Proj")


def test_longest_prefix_match_empty_candidates():
    assert longest_prefix_match([], "/a/b", key=lambda r: r.path) is None


def test_prefix_matches_orders_most_specific_first():
    roots = [Root("/home/u"), Root("/home/u/notes/sub"), Root("/other"), Root("/home/u/notes")]
    matches = prefix_matches(roots, "/home/u/notes/sub/a.md", key=lambda r: r.path)
    assert [r.path for r in matches] == ["/home/u/notes/sub", "/home/u/notes", "/home/u"]


def test_prefix_matches_without_match_is_empty():
    assert prefix_matches([Root("/a/b")], "/a/bc", key=lambda r: r.path) == []
