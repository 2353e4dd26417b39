"""Unique artifact id generation.

Ids combine a nanosecond timestamp, the process id, and a per-generator
counter: ``<ns>-<pid>-<n>``. Two live invocations never share a pid, so
they cannot collide; a fixed clock and pid are injectable to force it.
"""

from __future__ import annotations

import itertools
import os
import time
from collections.abc import Callable


class ArtifactIdGenerator:
    """Callable producing a fresh artifact id on each call."""

    def __init__(
        self,
        *,
        clock: Callable[[], int] = time.time_ns,
        pid: int | None = None,
    ) -> None:
        self._clock = clock
        self._pid = os.getpid() if pid is None else pid
        self._counter = itertools.count()

    def __call__(self) -> str:
        return f"{self._clock()}-{self._pid}-{next(self._counter)}"
