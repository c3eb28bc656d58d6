# hsmgraph/analysis/resolver.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import List, Optional, Sequence

from hsmgraph.core.errors import ResolutionError, StructuralViolation
from hsmgraph.core.tree import StateNode, StateTree

DEFAULT_MAX_DEPTH = 1000


class TargetResolver:
    """
    Turns the raw string targets declared on states into concrete nodes of
    a StateTree. The tree is only read.

    Resolution order for a target declared on ``source``:

    1. ``#<identifier>`` names a node by its full identifier. The machine
       root is not a state and cannot be targeted.
    2. A bare key naming a sibling of ``source`` resolves to that sibling
       (for the root itself, one of its children).
    3. A delimited path is followed from the nearest enclosing scope (starting
       at the source's parent and walking outward) whose children contain the
       first segment. A path starting with the machine key is followed from
       the root.
    4. Anything else raises ResolutionError.
    """

    def __init__(self, tree: StateTree, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """
        :param tree: The tree targets are resolved against.
        :param max_depth: Upper bound on default-descent steps before the
            tree is reported as cyclic.
        """
        self._tree = tree
        self._max_depth = max_depth

    @property
    def tree(self) -> StateTree:
        return self._tree

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def resolve(self, source: StateNode, target: str) -> StateNode:
        """
        Resolve ``target`` relative to ``source`` into its nominal destination.
        No default descent is applied.

        :raises ResolutionError: If no node matches.
        """
        if not isinstance(target, str) or not target:
            raise ResolutionError(
                f"Invalid transition target {target!r} on state '{source.id}'", source_id=source.id, target=target
            )

        if target.startswith("#"):
            node = self._tree.find(target[1:])
            if node is None:
                raise ResolutionError(
                    f"No state with identifier '{target[1:]}' (from '{source.id}')", source_id=source.id, target=target
                )
            if node.is_root:
                raise ResolutionError(
                    f"Target '{target}' declared on '{source.id}' names the machine root, which is not a state",
                    source_id=source.id,
                    target=target,
                )
            return node

        # The root has no siblings; its own children stand in for them.
        scope = self._tree.parent(source) or source
        sibling = self._tree.child(scope, target)
        if sibling is not None:
            return sibling

        delimiter = self._tree.delimiter
        if delimiter in target:
            segments = target.split(delimiter)
            if all(segments):
                node = self._resolve_path(source, segments)
                if node is not None:
                    return node

        raise ResolutionError(
            f"Target '{target}' declared on '{source.id}' matches no sibling and no ancestor-rooted path",
            source_id=source.id,
            target=target,
        )

    def _resolve_path(self, source: StateNode, segments: Sequence[str]) -> Optional[StateNode]:
        parent = self._tree.parent(source)
        scopes = [parent] + self._tree.ancestors(parent) if parent is not None else [source]
        for scope in scopes:
            if self._tree.child(scope, segments[0]) is None:
                continue
            node = self._follow(scope, segments)
            if node is not None:
                return node

        root = self._tree.root
        if segments[0] == root.key:
            return self._follow(root, segments[1:])
        return None

    def _follow(self, scope: StateNode, segments: Sequence[str]) -> Optional[StateNode]:
        node = scope
        for key in segments:
            node = self._tree.child(node, key)
            if node is None:
                return None
        return node

    def descent_path(self, node: StateNode) -> List[StateNode]:
        """
        Nodes visited by default descent, starting with ``node`` itself and
        ending with the node where descent stops.

        :raises StructuralViolation: On a dangling initial key or a descent cycle.
        """
        path = [node]
        seen = {node.id}
        current = node
        while self._tree.is_compound(current) and current.initial is not None:
            child = self._tree.child(current, current.initial)
            if child is None:
                raise StructuralViolation(
                    f"Initial state '{current.initial}' of '{current.id}' is not one of its children"
                )
            if child.id in seen or len(path) > self._max_depth:
                raise StructuralViolation(f"Default descent from '{node.id}' does not terminate")
            seen.add(child.id)
            path.append(child)
            current = child
        return path

    def descend_to_default(self, node: StateNode) -> StateNode:
        """Follow initial keys from ``node`` until a leaf or a node without one."""
        return self.descent_path(node)[-1]

    def resolve_effective(self, source: StateNode, target: str) -> StateNode:
        """Resolve and then descend to the default leaf."""
        return self.descend_to_default(self.resolve(source, target))
