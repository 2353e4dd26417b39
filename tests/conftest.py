"""Shared pytest fixtures and test helpers for filepipe tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from filepipe.config.models import TempConfig
from filepipe.config.settings import PipeSettings


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Keep config discovery, env overrides and logging per-test."""
    for name in ("FILEPIPE_CONFIG", "FILEPIPE_VERBOSE", "FILEPIPE_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("FILEPIPE_TEMP__DIRECTORY", raising=False)
    monkeypatch.delenv("FILEPIPE_SHELL__EXECUTABLE", raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pipe_logger = logging.getLogger("filepipe")
    pipe_level = pipe_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pipe_logger.setLevel(pipe_level)


@pytest.fixture
def artifact_dir(tmp_path: Path) -> Path:
    """Directory receiving temp artifacts; tests assert it ends up empty."""
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture
def temp_config(artifact_dir: Path) -> TempConfig:
    return TempConfig(directory=artifact_dir)


@pytest.fixture
def settings(artifact_dir: Path) -> PipeSettings:
    """Settings pointing artifacts at :func:`artifact_dir`."""
    return PipeSettings.from_cli(tmp_dir=str(artifact_dir))


@pytest.fixture
def fixed_ids() -> Callable[[], str]:
    """Id factory that always returns the same id, to force path collisions."""
    return lambda: "1-2-3"


def invoke(cli_runner: CliRunner, artifact_dir: Path, *args: str, input: bytes | None = None):
    """Run the CLI with artifacts redirected into *artifact_dir*."""
    from filepipe.cli import cli

    return cli_runner.invoke(cli, ["--tmp-dir", str(artifact_dir), *args], input=input)
