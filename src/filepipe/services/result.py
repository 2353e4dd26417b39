"""Outcome of a pipe run, handed from the service layer to the CLI."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a run failed. ``code`` is one of the ``*_FAILED`` constants in the runner."""

    model_config = {"frozen": True}

    code: str
    message: str


class ServiceResult(BaseModel):
    """``data`` always carries ``exit_code``; ``error`` is set iff ``ok`` is False."""

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
