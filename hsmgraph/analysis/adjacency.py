# hsmgraph/analysis/adjacency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple, Union

from hsmgraph.analysis.graph import list_nodes
from hsmgraph.analysis.resolver import TargetResolver
from hsmgraph.core.tree import StateNode, StateTree
from hsmgraph.core.types import EventID, RawTarget, StateID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafValue:
    """A state value naming a single top-level state, e.g. ``'yellow'``."""

    key: str

    def keys(self) -> Iterator[str]:
        yield self.key

    def to_value(self) -> Any:
        return self.key


@dataclass(frozen=True)
class NestedValue:
    """A state value descending through a compound state, e.g. ``{'red': 'walk'}``."""

    key: str
    inner: StateValue

    def keys(self) -> Iterator[str]:
        yield self.key
        yield from self.inner.keys()

    def to_value(self) -> Any:
        return {self.key: self.inner.to_value()}


StateValue = Union[LeafValue, NestedValue]


def state_value_from_keys(keys: Sequence[str]) -> StateValue:
    """
    Build a state value from the keys below the root, outermost first.

    :raises ValueError: If ``keys`` is empty.
    """
    if not keys:
        raise ValueError("A state value needs at least one key")
    value: StateValue = LeafValue(keys[-1])
    for key in reversed(keys[:-1]):
        value = NestedValue(key, value)
    return value


@dataclass(frozen=True)
class Destination:
    """
    Where an event leads from a given state.

    ``nominal`` is the relative-id of the declared destination and ``target``
    the relative-id of the state actually entered after default descent.
    """

    value: StateValue
    nominal: StateID
    target: StateID

    @property
    def descended(self) -> bool:
        return self.nominal != self.target

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.value.to_value()}


AdjacencyMap = Dict[StateID, Dict[EventID, Destination]]


def effective_transitions(tree: StateTree, node: StateNode) -> Dict[EventID, Tuple[StateNode, RawTarget]]:
    """
    The node's own transitions followed by every ancestor transition whose
    event is not already present. Closer declarations shadow farther ones.

    :return: Ordered mapping of event to ``(declaring node, raw target)``.
    """
    merged: Dict[EventID, Tuple[StateNode, RawTarget]] = {}
    for scope in [node] + tree.ancestors(node):
        for event, target in scope.transitions:
            if event not in merged:
                merged[event] = (scope, target)
    return merged


def build_adjacency(tree: StateTree, resolver: Optional[TargetResolver] = None) -> AdjacencyMap:
    """
    Map every state's relative-id to its effective event -> Destination map.

    :raises ResolutionError: If any effective transition cannot be resolved.
    """
    resolver = resolver or TargetResolver(tree)
    adjacency: AdjacencyMap = {}
    for node in list_nodes(tree):
        row: Dict[EventID, Destination] = {}
        for event, (scope, target) in effective_transitions(tree, node).items():
            row[event] = _destination(tree, resolver, scope, target)
        adjacency[tree.relative_id(node)] = row
    logger.debug("Built adjacency for %d states of machine '%s'", len(adjacency), tree.key)
    return adjacency


def _destination(tree: StateTree, resolver: TargetResolver, scope: StateNode, target: RawTarget) -> Destination:
    nominal = resolver.resolve(scope, target)
    effective = resolver.descend_to_default(nominal)
    return Destination(
        value=state_value_from_keys(tree.relative_keys(effective)),
        nominal=tree.relative_id(nominal),
        target=tree.relative_id(effective),
    )


def adjacency_as_dict(adjacency: AdjacencyMap) -> Dict[StateID, Dict[EventID, Dict[str, Any]]]:
    """Plain-dict rendering, e.g. ``{'green': {'TIMER': {'state': 'yellow'}}}``."""
    return {state: {event: dest.to_dict() for event, dest in row.items()} for state, row in adjacency.items()}
