"""Reusable click options for the filepipe command."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., object])


def examples_option(examples: str) -> Callable[[_F], _F]:
    """Eager ``--examples`` flag: print *examples* and exit 0.

    Keeps ``--help`` short while the full recipes stay one flag away.
    """

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )
