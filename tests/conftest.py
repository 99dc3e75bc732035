"""Test setup for navtree."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from navtree.schemas import NavNode  # noqa: E402


@pytest.fixture
def scenario_tree() -> list[NavNode]:
    """Two roots, the first with a single child.

    1
        4
    2
    """
    return [
        NavNode(id="1", children=[NavNode(id="4")]),
        NavNode(id="2"),
    ]


@pytest.fixture
def deep_tree() -> list[NavNode]:
    """Three roots with nested children.

    a
        a1
            a1x
        a2
    b
    c
        c1
    """
    return [
        NavNode(
            id="a",
            label="About",
            url="/about",
            children=[
                NavNode(id="a1", label="Team", url="/about/team", children=[NavNode(id="a1x", label="Jobs")]),
                NavNode(id="a2", label="Press", url="/about/press"),
            ],
        ),
        NavNode(id="b", label="Blog", url="/blog", highlighted="on"),
        NavNode(id="c", label="Contact", url="/contact", children=[NavNode(id="c1", label="Map")]),
    ]
