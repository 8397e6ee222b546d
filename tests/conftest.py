"""Shared fixtures for reftree tests."""

from typing import Dict, List

import pytest

from reftree.core.provider import AssetIndex
from reftree.core.types import Node


def build_index(graph: Dict[str, List[str]], **node_attrs) -> AssetIndex:
    """
    Build an AssetIndex from {node_id: [referencer ids]}.

    Names default to the id. `node_attrs` maps ids to extra Node fields.
    """
    index = AssetIndex()
    for node_id, referencers in graph.items():
        attrs = node_attrs.get(node_id, {})
        index.add_node(Node(id=node_id, referencers=referencers, **attrs))
    return index


@pytest.fixture
def cycle_index() -> AssetIndex:
    """A is referenced by B and C; C is referenced by A."""
    return build_index({"A": ["B", "C"], "B": [], "C": ["A"]})


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("REFTREE_INDEX", raising=False)
    monkeypatch.delenv("REFTREE_REBUILD_COMMAND", raising=False)


@pytest.fixture
def make_index():
    """Factory fixture wrapping build_index."""
    return build_index
