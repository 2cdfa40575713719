import json

import pytest

from neogrove.workspace.models import DiscoveryResult, Project, WorkspaceNode


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach the test docstring to failure reports.
    """
    outcome = yield
    rep = outcome.get_result()

    if rep.when == "call" and rep.failed:
        doc = item.obj.__doc__
        if doc:
            from inspect import cleandoc
            rep.sections.append(("Test Description", cleandoc(doc)))


@pytest.fixture
def discovery():
    """A small ecosystem with a worktree and an unrelated project."""
    return DiscoveryResult(projects=[
        Project(
            name="eco",
            path="/code/eco",
            workspaces=[
                WorkspaceNode(path="/code/eco", identifier="eco", name="eco", kind="ecosystem"),
                WorkspaceNode(path="/code/eco/feat", identifier="eco_feat", name="feat", kind="subproject"),
                WorkspaceNode(
                    path="/code/eco/.grove-worktrees/wt/sub",
                    identifier="eco_wt_sub",
                    name="sub",
                    kind="subproject",
                ),
            ],
        ),
        Project(
            name="app",
            path="/proj/app",
            workspaces=[WorkspaceNode(path="/proj/app", identifier="app", name="app")],
        ),
    ])


@pytest.fixture
def discovery_file(tmp_path, discovery):
    path = tmp_path / "discovery.json"
    path.write_text(json.dumps(discovery.to_dict()), encoding="utf-8")
    return path
