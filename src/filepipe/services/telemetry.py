"""Per-phase timing for ``--verbose`` runs.

A run has three fixed phases (acquire_input, execute, relay_output).
Each one emits a single ``phase.complete`` debug event carrying its
duration plus whatever the phase recorded. The event is filtered by
the ``filepipe`` logger level, so nothing is rendered without -v.
"""

from __future__ import annotations

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import structlog

_log = structlog.get_logger("filepipe.phases")


@contextmanager
def timed_phase(name: str, **fields: Any) -> Generator[dict[str, Any]]:
    """Time the ``with`` body as phase *name*.

    Yields a dict; keys added to it inside the body are logged with the
    event. An exception escaping the body, or an ``error`` key, is logged as
    ``ok=False``.
    """
    recorded: dict[str, Any] = dict(fields)
    started = time.perf_counter()
    ok = False
    try:
        yield recorded
        ok = "error" not in recorded
    finally:
        _log.debug(
            "phase.complete",
            phase=name,
            ok=ok,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **recorded,
        )
