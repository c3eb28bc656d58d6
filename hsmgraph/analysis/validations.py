# hsmgraph/analysis/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import List

from hsmgraph.analysis.resolver import DEFAULT_MAX_DEPTH, TargetResolver
from hsmgraph.core.errors import HSMGraphError, StructuralViolation, ValidationError
from hsmgraph.core.tree import StateTree

logger = logging.getLogger(__name__)


class TreeValidator:
    """
    Checks a StateTree against the invariants the graph derivation relies on,
    so configuration defects can be reported all at once instead of one
    failing query at a time.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """
        :param max_depth: Default-descent bound handed to the resolver.
        """
        self._max_depth = max_depth
        self._rules = _DefaultValidationRules

    def collect_errors(self, tree: StateTree) -> List[str]:
        """
        Run every rule and return the violation messages, in rule order.
        """
        resolver = TargetResolver(tree, max_depth=self._max_depth)
        errors: List[str] = []
        errors.extend(self._rules.check_initial_states(tree, resolver))
        errors.extend(self._rules.check_transitions(tree, resolver))
        return errors

    def validate_tree(self, tree: StateTree) -> None:
        """
        :raises ValidationError: If any rule reports a violation.
        """
        errors = self.collect_errors(tree)
        if errors:
            raise ValidationError("\n".join(errors))


class _DefaultValidationRules:
    """
    Built-in initial-state and resolution rules. Parent links are already
    checked when the tree is built.
    """

    @staticmethod
    def check_initial_states(tree: StateTree, resolver: TargetResolver) -> List[str]:
        """
        Initial keys must name a child and default descent must terminate.
        Compound states without an initial key are allowed but logged.
        """
        errors = []
        for node in tree:
            if node.initial is not None and tree.child(node, node.initial) is None:
                errors.append(f"Initial state '{node.initial}' of '{node.id}' is not one of its children")
                continue
            if tree.is_compound(node) and node.initial is None:
                logger.warning("Compound state '%s' has no initial state", node.id)
                continue
            try:
                resolver.descend_to_default(node)
            except StructuralViolation as e:
                errors.append(str(e))
        return errors

    @staticmethod
    def check_transitions(tree: StateTree, resolver: TargetResolver) -> List[str]:
        """
        Every declared target must resolve.
        """
        errors = []
        for node in tree:
            for event, target in node.transitions:
                try:
                    resolver.resolve(node, target)
                except HSMGraphError as e:
                    errors.append(f"{event}: {e}")
        return errors
