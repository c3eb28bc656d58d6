# tests/unit/analysis/test_graph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Unit tests for node and edge listing."""

import pytest

from hsmgraph.analysis.graph import list_edges, list_nodes
from hsmgraph.core.errors import ResolutionError, StructuralViolation
from hsmgraph.core.tree import StateNode, StateTree
from hsmgraph.core.types import Edge


def test_list_nodes_preorder(light_machine):
    """Each node comes before its children; children in declaration order."""
    assert [n.id for n in list_nodes(light_machine)] == [
        "light.green",
        "light.yellow",
        "light.red",
        "light.red.walk",
        "light.red.wait",
        "light.red.stop",
        "light.red.flashing",
    ]


def test_list_nodes_excludes_root(light_machine):
    assert light_machine.root not in list_nodes(light_machine)


def test_list_nodes_deep(deep_machine):
    assert [deep_machine.relative_id(n) for n in list_nodes(deep_machine)] == [
        "idle",
        "busy",
        "busy.loading",
        "busy.loading.fetch",
        "busy.loading.parse",
        "busy.done",
    ]


def test_list_nodes_single_state_machine():
    tree = StateTree("m")
    assert list_nodes(tree) == []
    assert list_edges(tree) == []


def test_detached_cycle_never_reaches_listing():
    """Records looping among themselves are rejected instead of silently dropped."""
    with pytest.raises(StructuralViolation, match="Cycle"):
        StateTree.from_nodes(
            [
                StateNode(id="m", key="m"),
                StateNode(id="m.a", key="a", parent_id="m"),
                StateNode(id="x", key="x", parent_id="y"),
                StateNode(id="y", key="y", parent_id="x"),
            ]
        )


def test_list_edges(light_machine):
    edges = list_edges(light_machine)
    assert all(isinstance(edge, Edge) for edge in edges)
    assert [(e.source.id, e.event, e.target.id) for e in edges] == [
        ("light.green", "TIMER", "light.yellow"),
        ("light.green", "POWER_OUTAGE", "light.red.flashing"),
        ("light.yellow", "TIMER", "light.red"),
        ("light.yellow", "POWER_OUTAGE", "light.red.flashing"),
        ("light.red", "TIMER", "light.green"),
        ("light.red", "POWER_OUTAGE", "light.red.flashing"),
        ("light.red.walk", "PED_COUNTDOWN", "light.red.wait"),
        ("light.red.wait", "PED_COUNTDOWN", "light.red.stop"),
    ]


def test_list_edges_are_not_inherited(deep_machine):
    """Root and ancestor transitions are not repeated on descendants."""
    edges = list_edges(deep_machine)
    assert [(deep_machine.relative_id(e.source), e.event, deep_machine.relative_id(e.target)) for e in edges] == [
        ("idle", "START", "busy"),
        ("busy", "CANCEL", "idle"),
        ("busy.loading.fetch", "FETCHED", "busy.loading.parse"),
        ("busy.loading.parse", "PARSED", "busy.done"),
        ("busy.loading.parse", "CANCEL", "busy.loading.fetch"),
        ("busy.done", "AGAIN", "busy.loading.parse"),
    ]


def test_list_edges_unresolvable_target():
    tree = StateTree("m", initial="a")
    tree.add_state("a", on={"GO": "c"})
    tree.add_state("c", on={"GO": "nowhere"})
    with pytest.raises(ResolutionError, match="nowhere"):
        list_edges(tree)


def test_list_edges_rejects_root_target():
    """The root is not a listed state, so no edge may point at it."""
    tree = StateTree("m", initial="a")
    tree.add_state("a", on={"RESET": "#m"})
    with pytest.raises(ResolutionError, match="machine root"):
        list_edges(tree)


def test_listing_is_idempotent(light_machine):
    assert list_nodes(light_machine) == list_nodes(light_machine)
    assert list_edges(light_machine) == list_edges(light_machine)
