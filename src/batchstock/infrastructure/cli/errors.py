"""Translate domain failures into click errors with distinct exit codes."""

from __future__ import annotations

import click

from batchstock.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    UpstreamUnavailableError,
)

EXIT_FAILURE = 1
EXIT_UPSTREAM_UNAVAILABLE = 3
EXIT_NOT_FOUND = 4


def to_click_exception(exc: DomainException) -> click.ClickException:
    error = click.ClickException(str(exc))
    if isinstance(exc, UpstreamUnavailableError):
        error.exit_code = EXIT_UPSTREAM_UNAVAILABLE
    elif isinstance(exc, EntityNotFoundError):
        error.exit_code = EXIT_NOT_FOUND
    else:
        error.exit_code = EXIT_FAILURE
    return error


def exit_code_for_status(status: int) -> int:
    if status == 404:
        return EXIT_NOT_FOUND
    if status == 503:
        return EXIT_UPSTREAM_UNAVAILABLE
    return EXIT_FAILURE if status >= 400 else 0
