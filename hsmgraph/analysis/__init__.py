"""
Analysis package deriving graph views from a StateTree.

Layers, leaves first:
- resolver: raw target strings to nodes, default descent
- graph: flat node and edge lists
- adjacency: effective transitions per state, with inheritance
- paths: breadth-first shortest event paths from the initial state

Every operation is a pure function of the tree.
"""

from .adjacency import (
    Destination,
    LeafValue,
    NestedValue,
    adjacency_as_dict,
    build_adjacency,
    effective_transitions,
    state_value_from_keys,
)
from .graph import list_edges, list_nodes
from .machine import MachineGraph
from .paths import compute_paths, initial_state_id, shortest_paths_as_dict, shortest_paths_from
from .resolver import TargetResolver
from .validations import TreeValidator

__all__ = [
    "Destination",
    "LeafValue",
    "NestedValue",
    "adjacency_as_dict",
    "build_adjacency",
    "effective_transitions",
    "state_value_from_keys",
    "list_edges",
    "list_nodes",
    "MachineGraph",
    "compute_paths",
    "initial_state_id",
    "shortest_paths_as_dict",
    "shortest_paths_from",
    "TargetResolver",
    "TreeValidator",
]
