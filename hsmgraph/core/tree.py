# hsmgraph/core/tree.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from hsmgraph.core.errors import StructuralViolation
from hsmgraph.core.types import EventID, RawTarget, StateID


@dataclass(frozen=True)
class StateNode:
    """
    A single state record. Hierarchy lives in the owning StateTree, so the
    parent is referenced by identifier and children are looked up there.
    """

    id: StateID
    key: str
    parent_id: Optional[StateID] = None
    initial: Optional[str] = None
    transitions: Tuple[Tuple[EventID, RawTarget], ...] = ()

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def events(self) -> List[EventID]:
        """Own declared events, in declaration order."""
        return [event for event, _ in self.transitions]


NodeRef = Union[StateNode, StateID]


def _freeze_transitions(on: Optional[Union[Mapping[EventID, RawTarget], Iterable]]) -> Tuple[Tuple[str, str], ...]:
    if not on:
        return ()
    items = on.items() if isinstance(on, Mapping) else on
    return tuple((event, target) for event, target in items)


class StateTree:
    """
    Arena holding every StateNode of one machine. All structural lookups
    (parent, children, ancestors) go through the arena, so nodes never hold
    references to each other.

    The tree is expected to be complete before any analysis runs on it and is
    not modified afterwards.
    """

    def __init__(
        self,
        key: str,
        initial: Optional[str] = None,
        on: Optional[Mapping[EventID, RawTarget]] = None,
        delimiter: str = ".",
    ) -> None:
        """
        :param key: The machine key, which is also the root identifier.
        :param initial: Key of the root's initial child.
        :param on: Transitions declared on the root itself.
        :param delimiter: Separator used in identifiers and path targets.
        """
        if not key:
            raise StructuralViolation("Machine key must be a non-empty string")
        self._delimiter = delimiter
        self._nodes: Dict[StateID, StateNode] = {}
        self._children: Dict[StateID, Dict[str, StateID]] = {}
        self._root_id = key
        self._register(StateNode(id=key, key=key, initial=initial, transitions=_freeze_transitions(on)))

    @classmethod
    def from_nodes(cls, nodes: Iterable[StateNode], delimiter: str = ".") -> "StateTree":
        """
        Build an arena from ready-made node records. Children are ordered as
        the records are given.

        :raises StructuralViolation: If there is not exactly one root, a parent
            is unknown, an identifier repeats, parent links loop, or an
            identifier is not its parent's identifier joined with its key.
        """
        records = list(nodes)
        roots = [n for n in records if n.parent_id is None]
        if len(roots) != 1:
            raise StructuralViolation(f"Expected exactly one root node, found {len(roots)}")
        root = roots[0]
        if root.id != root.key:
            raise StructuralViolation(f"Root identifier '{root.id}' must equal its key '{root.key}'")
        tree = cls(root.key, initial=root.initial, on=root.transitions, delimiter=delimiter)
        known = {n.id for n in records}
        for node in records:
            if node is root:
                continue
            if node.parent_id not in known:
                raise StructuralViolation(f"Parent '{node.parent_id}' of state '{node.id}' does not exist")
            tree._register(node)

        for node in tree:
            if node.is_root:
                continue
            # Raises on a cycle; otherwise the chain ends at the single root.
            tree.ancestors(node)
            expected = f"{node.parent_id}{delimiter}{node.key}"
            if delimiter in node.key or node.id != expected:
                raise StructuralViolation(f"Identifier '{node.id}' does not match its key path '{expected}'")
        return tree

    def add_state(
        self,
        key: str,
        parent: Optional[NodeRef] = None,
        initial: Optional[str] = None,
        on: Optional[Mapping[EventID, RawTarget]] = None,
    ) -> StateNode:
        """
        Add a state under a parent (default: the root) and return its record.

        :param key: Local key, unique among its siblings.
        :param parent: Parent node or identifier; it must already be in the tree.
        :param initial: Key of the default child, for compound states.
        :param on: Ordered mapping of event name to raw target.
        :raises StructuralViolation: On an unknown parent or a duplicate identifier.
        """
        if not key or self._delimiter in key:
            raise StructuralViolation(f"Invalid state key {key!r}")
        parent_id = self._root_id if parent is None else self._ref_id(parent)
        if parent_id not in self._nodes:
            raise StructuralViolation(f"Parent state '{parent_id}' must be added to the tree first")
        node = StateNode(
            id=f"{parent_id}{self._delimiter}{key}",
            key=key,
            parent_id=parent_id,
            initial=initial,
            transitions=_freeze_transitions(on),
        )
        self._register(node)
        return node

    def _register(self, node: StateNode) -> None:
        if node.id in self._nodes:
            raise StructuralViolation(f"Duplicate state identifier '{node.id}'")
        if node.parent_id is not None:
            siblings = self._children.setdefault(node.parent_id, {})
            if node.key in siblings:
                raise StructuralViolation(f"Duplicate key '{node.key}' under '{node.parent_id}'")
            siblings[node.key] = node.id
        self._nodes[node.id] = node
        self._children.setdefault(node.id, {})

    def _ref_id(self, ref: NodeRef) -> StateID:
        return ref.id if isinstance(ref, StateNode) else ref

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def key(self) -> str:
        return self._root_id

    @property
    def root(self) -> StateNode:
        return self._nodes[self._root_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, StateNode):
            return self._nodes.get(ref.id) == ref
        return ref in self._nodes

    def __iter__(self) -> Iterator[StateNode]:
        return iter(self._nodes.values())

    def get(self, ref: NodeRef) -> StateNode:
        """
        :raises StructuralViolation: If the identifier is not in the tree.
        """
        node = self._nodes.get(self._ref_id(ref))
        if node is None:
            raise StructuralViolation(f"State '{self._ref_id(ref)}' is not in the tree")
        return node

    def find(self, state_id: StateID) -> Optional[StateNode]:
        return self._nodes.get(state_id)

    def parent(self, node: StateNode) -> Optional[StateNode]:
        if node.parent_id is None:
            return None
        return self.get(node.parent_id)

    def child_keys(self, node: StateNode) -> List[str]:
        return list(self._children.get(node.id, {}))

    def children(self, node: StateNode) -> List[StateNode]:
        """Direct children in declaration order."""
        return [self._nodes[child_id] for child_id in self._children.get(node.id, {}).values()]

    def child(self, node: StateNode, key: str) -> Optional[StateNode]:
        child_id = self._children.get(node.id, {}).get(key)
        return None if child_id is None else self._nodes[child_id]

    def is_compound(self, node: StateNode) -> bool:
        return bool(self._children.get(node.id))

    def is_leaf(self, node: StateNode) -> bool:
        return not self.is_compound(node)

    def ancestors(self, node: StateNode) -> List[StateNode]:
        """
        Ancestors from the immediate parent up to the root.

        :raises StructuralViolation: If the parent links loop.
        """
        ancestors: List[StateNode] = []
        seen = {node.id}
        current = self.parent(node)
        while current is not None:
            if current.id in seen:
                raise StructuralViolation(f"Cycle detected in parent links of state '{node.id}'")
            seen.add(current.id)
            ancestors.append(current)
            current = self.parent(current)
        return ancestors

    def relative_keys(self, node: StateNode) -> List[str]:
        """Keys from just below the root down to the node."""
        keys = [node.key]
        keys.extend(a.key for a in self.ancestors(node))
        keys.reverse()
        return keys[1:]

    def relative_id(self, node: StateNode) -> StateID:
        """The identifier with the machine key stripped, e.g. 'red.walk'."""
        if node.id == self._root_id:
            return ""
        return self._delimiter.join(self.relative_keys(node))

    def node_by_relative_id(self, relative_id: StateID) -> StateNode:
        node = self.root
        for key in relative_id.split(self._delimiter) if relative_id else ():
            child = self.child(node, key)
            if child is None:
                raise StructuralViolation(f"State '{relative_id}' is not in the tree")
            node = child
        return node
