# tests/utils.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Common test helpers for building state trees.
"""

from typing import Any, Dict, Optional

from hsmgraph.core.tree import StateNode, StateTree


def build_tree(key: str, config: Dict[str, Any], delimiter: str = ".") -> StateTree:
    """
    Build a StateTree from a nested config of the form
    ``{"initial": ..., "on": {...}, "states": {...}}``.
    """
    tree = StateTree(key, initial=config.get("initial"), on=config.get("on"), delimiter=delimiter)

    def add_children(parent: StateNode, states: Optional[Dict[str, Any]]) -> None:
        for child_key, child_config in (states or {}).items():
            node = tree.add_state(
                child_key,
                parent=parent,
                initial=child_config.get("initial"),
                on=child_config.get("on"),
            )
            add_children(node, child_config.get("states"))

    add_children(tree.root, config.get("states"))
    return tree


PEDESTRIAN_STATES = {
    "initial": "walk",
    "states": {
        "walk": {"on": {"PED_COUNTDOWN": "wait"}},
        "wait": {"on": {"PED_COUNTDOWN": "stop"}},
        "stop": {},
        "flashing": {},
    },
}

LIGHT_MACHINE = {
    "initial": "green",
    "states": {
        "green": {"on": {"TIMER": "yellow", "POWER_OUTAGE": "red.flashing"}},
        "yellow": {"on": {"TIMER": "red", "POWER_OUTAGE": "red.flashing"}},
        "red": dict(on={"TIMER": "green", "POWER_OUTAGE": "red.flashing"}, **PEDESTRIAN_STATES),
    },
}
