"""Shared pytest fixtures for linetrace tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.core.graph_test_helpers import (
    ANALYZED,
    build_graph,
    make_edge,
    make_node,
    node_row,
    write_trace,
)

SOURCE_TEXT = """method m(x: Int) returns (r: Int)
  requires x > 0
{
  var y: Int := x + 1
  assert y > 1
  r := y
}
"""


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer LINETRACE_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("LINETRACE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chain_graph():
    """requires(2) -> assign(4) -> assert(5) -> assign(6), plus an external lemma.

    Line 5 is an explicit assertion, so the edge 5->6 is credited to 4.
    """
    nodes = [
        make_node("n2", "Assumption", "Explicit", line=2),
        make_node("n4", "Assumption", "Implicit", line=4),
        make_node("n5", "Assertion", "Explicit", line=5),
        make_node("n6", "Assertion", "Implicit", line=6),
        make_node("lemma", "Assertion", "Explicit", line=12, file="lemmas.vpr"),
    ]
    edges = [
        make_edge("n2", "n4", "uses"),
        make_edge("n4", "n5", "uses"),
        make_edge("n5", "n6", "uses"),
        make_edge("lemma", "n5", "lemma"),
    ]
    contents = {n: line.strip() for n, line in enumerate(SOURCE_TEXT.split("\n"), start=1)}
    return build_graph(nodes, edges, contents=contents)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace with an analyzed file, a helper file and trace records."""
    (tmp_path / ANALYZED).write_text(SOURCE_TEXT, encoding="utf-8")
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "lemmas.vpr").write_text("lemma\n" * 20, encoding="utf-8")

    write_trace(
        tmp_path / "graphExports" / "joined",
        [
            node_row("n2", "Assumption", "Explicit", line=2),
            node_row("n4", "Assumption", "Implicit", line=4),
            node_row("n5", "Assertion", "Explicit", line=5),
            node_row("n6", "Assertion", "Implicit", line=6),
            node_row("lemma", "Assertion", "Explicit", line=12, file="lemmas.vpr"),
        ],
        [
            "n2,n4,uses",
            "n4,n5,uses",
            "n5,n6,uses",
            "lemma,n5,lemma",
        ],
    )
    return tmp_path


@pytest.fixture
def analyzed_file(workspace: Path) -> Path:
    return workspace / ANALYZED
