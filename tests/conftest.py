# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from tests.utils import LIGHT_MACHINE, build_tree


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def light_machine():
    """Three-phase traffic light with a pedestrian sub-cycle under 'red'."""
    return build_tree("light", LIGHT_MACHINE)


@pytest.fixture
def resolver(light_machine):
    from hsmgraph.analysis.resolver import TargetResolver

    return TargetResolver(light_machine)


@pytest.fixture
def deep_machine():
    """
    Three levels of nesting:

    app
    ├─ idle
    └─ busy [initial: loading]
        ├─ loading [initial: fetch]
        │   ├─ fetch
        │   └─ parse
        └─ done
    """
    return build_tree(
        "app",
        {
            "initial": "idle",
            "on": {"RESET": "idle"},
            "states": {
                "idle": {"on": {"START": "busy"}},
                "busy": {
                    "initial": "loading",
                    "on": {"CANCEL": "idle"},
                    "states": {
                        "loading": {
                            "initial": "fetch",
                            "states": {
                                "fetch": {"on": {"FETCHED": "parse"}},
                                "parse": {"on": {"PARSED": "busy.done", "CANCEL": "fetch"}},
                            },
                        },
                        "done": {"on": {"AGAIN": "loading.parse"}},
                    },
                },
            },
        },
    )


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from hsmgraph.core.errors import HSMGraphError, ResolutionError, StructuralViolation, ValidationError

    return (HSMGraphError, ResolutionError, StructuralViolation, ValidationError)
