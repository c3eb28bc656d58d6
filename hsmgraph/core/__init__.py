"""
Core package: the state tree input contract, shared types and errors.

Architecture:
- StateTree is an arena owning every StateNode record of one machine
- Parent links are identifiers resolved through the arena
- Records are immutable once registered
"""

from .errors import HSMGraphError, ResolutionError, StructuralViolation, ValidationError
from .tree import StateNode, StateTree
from .types import Edge, PathStep

__all__ = [
    "HSMGraphError",
    "ResolutionError",
    "StructuralViolation",
    "ValidationError",
    "StateNode",
    "StateTree",
    "Edge",
    "PathStep",
]
