import io
from unittest.mock import Mock

import pytest

from neogrove.aliases.normalize import PathNormalizer
from neogrove.aliases.notebooks import collect_notebook_roots
from neogrove.aliases.resolver import AliasResolver
from neogrove.errors import InputReadError
from neogrove.workspace.provider import WorkspaceProvider


@pytest.fixture
def resolver(discovery):
    return AliasResolver(
        WorkspaceProvider(discovery),
        discovery,
        collect_notebook_roots({"default": "/nb", "work": "/code/eco/notes"}),
        PathNormalizer(case_insensitive=False),
        logger=Mock(),
    )


def test_resolve_prefers_notebook_over_workspace(resolver):
    assert resolver.resolve("/code/eco/notes/todo.md") == "@a:nb:work:todo.md"


def test_resolve_workspace_alias(resolver):
    assert resolver.resolve("/code/eco/feat/a/b.go") == "@a:eco:feat/a/b.go"


def test_resolve_unmatched_path_is_echoed(resolver):
    assert resolver.resolve("/tmp/unrelated/file.txt") == "/tmp/unrelated/file.txt"


def test_resolve_lines_is_total(resolver):
    lines = [
        "/nb/x/y.md\n",
        "\n",
        "/proj/app/x.go\n",
        "/proj/app-extra/x.go\n",
        "/tmp/unrelated/file.txt",
    ]
    assert resolver.resolve_lines(lines) == {
        "/nb/x/y.md": "@a:nb:x/y.md",
        "/proj/app/x.go": "@a:app/x.go",
        "/proj/app-extra/x.go": "/proj/app-extra/x.go",
        "/tmp/unrelated/file.txt": "/tmp/unrelated/file.txt",
    }


def test_resolve_lines_collapses_duplicates_and_strips_crlf(resolver):
    result = resolver.resolve_lines(["/proj/app/x.go\r\n", "/proj/app/x.go\n", ""])
    assert result == {"/proj/app/x.go": "@a:app/x.go"}


def test_resolve_stream_reads_text_stream(resolver):
    stream = io.StringIO("/proj/app/main.go\n/nb/inbox.md\n")
    assert resolver.resolve_stream(stream) == {
        "/proj/app/main.go": "@a:app/main.go",
        "/nb/inbox.md": "@a:nb:inbox.md",
    }


def test_resolve_is_deterministic(resolver):
    paths = ["/code/eco/.grove-worktrees/wt/sub/a.go", "/nb/a.md", "/elsewhere"]
    assert resolver.resolve_lines(paths) == resolver.resolve_lines(paths)


def test_read_failure_aborts_batch(resolver):
    def broken_lines():
        yield "/proj/app/x.go"
        raise OSError("stream closed")

    with pytest.raises(InputReadError, match="stream closed"):
        resolver.resolve_lines(broken_lines())


def test_relative_path_failure_falls_back_to_input(resolver, monkeypatch):
    """A per-entry relative path failure echoes the path and keeps the batch going."""
    def raise_value_error(node, path, normalizer):
        raise ValueError("path is on mount 'C:', start on mount 'D:'")

    monkeypatch.setattr("neogrove.aliases.resolver.workspace_alias", raise_value_error)
    result = resolver.resolve_lines(["/proj/app/x.go", "/nb/y.md"])
    assert result == {"/proj/app/x.go": "/proj/app/x.go", "/nb/y.md": "@a:nb:y.md"}
    first_call = resolver.logger.debug.call_args_list[0]
    assert first_call.args[1:3] == ("/proj/app/x.go", "/proj/app")


def test_default_normalizer_is_case_sensitive(discovery):
    resolver = AliasResolver(WorkspaceProvider(discovery), discovery)
    assert resolver.resolve("/PROJ/APP/x.go") == "/PROJ/APP/x.go"
