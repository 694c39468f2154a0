"""Correlation IDs that tie together the log lines of one exposure check.

Configuration resolution, each period fetch, the matching call and the final
transition of a single check all log under the same ID. The ID lives in a
contextvar, so it follows the check across awaits and stays inside the task
the single-flight wrapper spawns.

    with exposure_check_scope() as check_id:
        await service.perform_exposure_check()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the active check's ID, or "" outside any check."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


@contextmanager
def exposure_check_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run a block under a correlation ID, restoring the previous one after.

    Args:
        correlation_id: ID to use; a fresh UUID4 when omitted.
    """
    token = _correlation_id.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the active correlation_id.

    Entries logged outside any check carry no correlation_id key, and an
    explicitly bound correlation_id is left untouched.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
