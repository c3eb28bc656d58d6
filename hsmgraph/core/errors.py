# hsmgraph/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Optional


class HSMGraphError(Exception):
    """
    Base exception class for errors raised while deriving graphs from statecharts.
    """


class ResolutionError(HSMGraphError):
    """
    Raised when a declared transition target matches no sibling and no
    ancestor-rooted path. The graph cannot be derived from such a tree.
    """

    def __init__(self, message: str, source_id: Optional[str] = None, target: Optional[str] = None) -> None:
        super().__init__(message)
        self.source_id = source_id
        self.target = target


class StructuralViolation(HSMGraphError):
    """
    Raised when the state tree breaks one of its invariants: duplicate
    identifiers, a dangling initial key, or a cycle in parent links or descent.
    """


class ValidationError(HSMGraphError):
    """
    Raised when tree validation collects one or more violations.
    """
