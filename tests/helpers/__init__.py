"""Test helpers for exposure monitor tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    make_summary: ExposureSummary builder with sensible defaults

Usage:
    from tests.helpers import FakeTimeAuthority, make_summary
"""

from tests.helpers.builders import make_summary
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority", "make_summary"]
