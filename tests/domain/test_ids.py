"""Tests for artifact id generation."""

from __future__ import annotations

import itertools
import os

from filepipe.domain.ids import ArtifactIdGenerator


class TestArtifactIdGenerator:
    def test_shape(self) -> None:
        parts = ArtifactIdGenerator()().split("-")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)

    def test_includes_pid(self) -> None:
        artifact_id = ArtifactIdGenerator()()
        assert artifact_id.split("-")[1] == str(os.getpid())

    def test_unique_at_same_timestamp(self) -> None:
        gen = ArtifactIdGenerator(clock=lambda: 1000, pid=42)
        ids = {gen() for _ in range(100)}
        assert len(ids) == 100

    def test_injected_clock_and_pid(self) -> None:
        ticks = itertools.count(5)
        gen = ArtifactIdGenerator(clock=lambda: next(ticks), pid=7)
        assert gen() == "5-7-0"
        assert gen() == "6-7-1"

    def test_separate_generators_collide_on_same_inputs(self) -> None:
        # Uniqueness relies on the pid; two generators faking one pid collide.
        a = ArtifactIdGenerator(clock=lambda: 1, pid=1)
        b = ArtifactIdGenerator(clock=lambda: 1, pid=1)
        assert a() == b()
