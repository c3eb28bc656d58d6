# hsmgraph/analysis/graph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Flat node and edge views over a StateTree."""

import logging
from typing import List, Optional

from hsmgraph.analysis.resolver import TargetResolver
from hsmgraph.core.errors import StructuralViolation
from hsmgraph.core.tree import StateNode, StateTree
from hsmgraph.core.types import Edge

logger = logging.getLogger(__name__)


def list_nodes(tree: StateTree) -> List[StateNode]:
    """
    Pre-order walk of the tree (each node before its children, children in
    declaration order), excluding the root.

    :raises StructuralViolation: If a node is reached twice.
    """
    nodes: List[StateNode] = []
    seen = {tree.root.id}
    # Explicit stack; children are pushed reversed so the first child pops first.
    stack = list(reversed(tree.children(tree.root)))
    while stack:
        node = stack.pop()
        if node.id in seen:
            raise StructuralViolation(f"State '{node.id}' is reachable more than once")
        seen.add(node.id)
        nodes.append(node)
        stack.extend(reversed(tree.children(node)))
    logger.debug("Listed %d states of machine '%s'", len(nodes), tree.key)
    return nodes


def list_edges(tree: StateTree, resolver: Optional[TargetResolver] = None) -> List[Edge]:
    """
    One edge per directly declared transition, in node order and then
    declaration order. Targets are nominal destinations; inherited
    transitions are not repeated on descendants.

    :raises ResolutionError: If any declared target cannot be resolved.
    """
    resolver = resolver or TargetResolver(tree)
    edges = [
        Edge(source=node, event=event, target=resolver.resolve(node, target))
        for node in list_nodes(tree)
        for event, target in node.transitions
    ]
    logger.debug("Listed %d edges of machine '%s'", len(edges), tree.key)
    return edges
