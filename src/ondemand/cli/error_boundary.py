"""Clean error output for CLI commands."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ondemand.errors import OnDemandError

F = TypeVar("F", bound=Callable[..., Any])


def cli_error_boundary(func: F) -> F:
    """Render OnDemandError as `Error: <message>` on stderr and exit 1.

    Every failure the services raise on purpose is an OnDemandError; anything
    else is a bug and propagates with its traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except OnDemandError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
