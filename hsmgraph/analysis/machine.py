# hsmgraph/analysis/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List, Optional

from hsmgraph.analysis.adjacency import AdjacencyMap, build_adjacency
from hsmgraph.analysis.graph import list_edges, list_nodes
from hsmgraph.analysis.paths import compute_paths, initial_state_id
from hsmgraph.analysis.resolver import TargetResolver
from hsmgraph.analysis.validations import TreeValidator
from hsmgraph.core.tree import StateNode, StateTree
from hsmgraph.core.types import Edge, PathMap, StateID


class MachineGraph:
    """
    Bundles the derived views of one StateTree behind a single resolver.
    Nothing is cached; every call recomputes from the tree.
    """

    def __init__(self, tree: StateTree, resolver: Optional[TargetResolver] = None) -> None:
        """
        :param tree: The machine to analyze.
        :param resolver: Optional resolver, e.g. one with a custom max_depth.
        """
        self._tree = tree
        self._resolver = resolver or TargetResolver(tree)

    @property
    def tree(self) -> StateTree:
        return self._tree

    def nodes(self) -> List[StateNode]:
        return list_nodes(self._tree)

    def edges(self) -> List[Edge]:
        return list_edges(self._tree, self._resolver)

    def adjacency(self) -> AdjacencyMap:
        return build_adjacency(self._tree, self._resolver)

    def shortest_paths(self) -> PathMap:
        return compute_paths(self._tree, self._resolver)

    def initial_state(self) -> StateID:
        return initial_state_id(self._tree, self._resolver)

    def validate(self) -> None:
        """
        :raises ValidationError: If the tree has structural or resolution problems.
        """
        TreeValidator(max_depth=self._resolver.max_depth).validate_tree(self._tree)
