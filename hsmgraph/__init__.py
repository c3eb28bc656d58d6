"""hsmgraph: graph analysis of hierarchical state machine definitions

Given a tree of nested states with named event transitions, this package
derives the flat set of states, the declared transition edges, each state's
effective transitions (including those inherited from enclosing states) and
the shortest event path from the initial state to every other state.

Responsibilities:
    - Symbolic target resolution (sibling keys, paths, #identifiers)
    - Default-substate descent into compound states
    - Transition inheritance across the hierarchy
    - Breadth-first shortest-path computation

Cross-cutting Concerns:
    Thread Safety:
        - All operations are pure functions over an immutable tree
        - No shared mutable state; safe to call from several threads

    Error Handling:
        - ResolutionError for unresolvable targets
        - StructuralViolation for broken tree invariants
        - Errors propagate to the caller; nothing is retried

    Logging:
        - Standard library logging, one logger per module
        - No handlers are configured by the library
"""

from hsmgraph.analysis import (
    MachineGraph,
    TargetResolver,
    TreeValidator,
    adjacency_as_dict,
    build_adjacency,
    compute_paths,
    list_edges,
    list_nodes,
    shortest_paths_as_dict,
)
from hsmgraph.core import (
    Edge,
    HSMGraphError,
    PathStep,
    ResolutionError,
    StateNode,
    StateTree,
    StructuralViolation,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "MachineGraph",
    "TargetResolver",
    "TreeValidator",
    "adjacency_as_dict",
    "build_adjacency",
    "compute_paths",
    "list_edges",
    "list_nodes",
    "shortest_paths_as_dict",
    "Edge",
    "HSMGraphError",
    "PathStep",
    "ResolutionError",
    "StateNode",
    "StateTree",
    "StructuralViolation",
    "ValidationError",
]
