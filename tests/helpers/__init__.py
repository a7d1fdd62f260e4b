"""Test helpers for the case-lifecycle engine tests.

Helpers:
    FakeClock: Controllable clock for deterministic tests
    seed_*: Insert fixture rows straight into the in-memory tables

Usage:
    from tests.helpers import FakeClock, seed_resource
"""

from tests.helpers.case_seeds import (
    seed_decision,
    seed_protocol,
    seed_resource,
    seed_session,
    seed_session_resource,
)
from tests.helpers.fake_clock import FakeClock

__all__ = [
    "FakeClock",
    "seed_decision",
    "seed_protocol",
    "seed_resource",
    "seed_session",
    "seed_session_resource",
]
