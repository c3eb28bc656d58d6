# hsmgraph/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Dict, List, NamedTuple

if TYPE_CHECKING:
    from hsmgraph.core.tree import StateNode

StateID = str
EventID = str
RawTarget = str


class Edge(NamedTuple):
    """A declared transition: the target is the nominal destination."""

    source: "StateNode"
    event: EventID
    target: "StateNode"


class PathStep(NamedTuple):
    """One transition taken along a path."""

    from_state: StateID
    event: EventID

    def to_dict(self) -> Dict[str, str]:
        return {"fromState": self.from_state, "event": self.event}


Path = List[PathStep]
PathMap = Dict[StateID, Path]
