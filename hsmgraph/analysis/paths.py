# hsmgraph/analysis/paths.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from hsmgraph.analysis.adjacency import AdjacencyMap, build_adjacency
from hsmgraph.analysis.graph import list_nodes
from hsmgraph.analysis.resolver import TargetResolver
from hsmgraph.core.errors import StructuralViolation
from hsmgraph.core.tree import StateTree
from hsmgraph.core.types import PathMap, PathStep, StateID

logger = logging.getLogger(__name__)


def initial_state_id(tree: StateTree, resolver: Optional[TargetResolver] = None) -> StateID:
    """
    Relative-id of the state the machine starts in.

    :raises StructuralViolation: If the root has no initial state to descend into.
    """
    resolver = resolver or TargetResolver(tree)
    initial = resolver.descend_to_default(tree.root)
    if initial.is_root:
        raise StructuralViolation(f"Machine '{tree.key}' has no initial state")
    return tree.relative_id(initial)


def shortest_paths_from(adjacency: AdjacencyMap, initial: StateID) -> PathMap:
    """
    Breadth-first search over an adjacency map. States are expanded level
    by level and each state's events in map order; the first path found to
    a state is kept.
    """
    paths: PathMap = {initial: []}
    queue: Deque[StateID] = deque([initial])
    while queue:
        state = queue.popleft()
        for event, destination in adjacency.get(state, {}).items():
            if destination.target in paths:
                continue
            paths[destination.target] = paths[state] + [PathStep(state, event)]
            queue.append(destination.target)
    return paths


def compute_paths(tree: StateTree, resolver: Optional[TargetResolver] = None) -> PathMap:
    """
    Shortest event path from the initial state to every reachable state.
    Unreachable states are left out of the result.

    :raises ResolutionError: If any effective transition cannot be resolved.
    :raises StructuralViolation: If the tree has no initial state.
    """
    resolver = resolver or TargetResolver(tree)
    adjacency = build_adjacency(tree, resolver)
    paths = shortest_paths_from(adjacency, initial_state_id(tree, resolver))

    leaves = [tree.relative_id(node) for node in list_nodes(tree) if tree.is_leaf(node)]
    unreachable = [state for state in leaves if state not in paths]
    if unreachable:
        logger.warning("States %s of machine '%s' are not reachable from the initial state", unreachable, tree.key)
    logger.debug("Computed shortest paths to %d states of machine '%s'", len(paths), tree.key)
    return paths


def shortest_paths_as_dict(paths: PathMap) -> Dict[StateID, List[Dict[str, Any]]]:
    """Plain-dict rendering: ``{'yellow': [{'fromState': 'green', 'event': 'TIMER'}]}``."""
    return {state: [step.to_dict() for step in path] for state, path in paths.items()}
