from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import typer

from ..global_config import PACKAGE_NAME

_LOGGING_CONFIGURED = False


def get_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure CLI-wide logging once.

    Sets up basic logging configuration for the CLI. Safe to call multiple
    times; only configures on first call.

    Args:
        level: Logging level (defaults to WARNING).
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger hooked into the shared CLI configuration."""
    return logging.getLogger(name)


@contextmanager
def handle_errors(
    operation: str,
    *,
    logger: logging.Logger | None = None,
) -> Generator[None, None, None]:
    """Provide consistent exception handling for CLI operations.

    Context manager that catches exceptions, logs them, displays a
    user-friendly error message, and exits with code 1. Re-raises typer.Exit
    to allow normal CLI exit flow.

    Args:
        operation: Human-readable operation name for error messages.
        logger: Logger instance. Defaults to module logger if None.

    Raises:
        typer.Exit: Always exits with code 1 on exception (except typer.Exit
            which is re-raised).

    User Output:
        - Prints error message via typer.secho() in red: "✗ {operation} failed: {exc}".
    """
    logger = logger or get_logger(__name__)
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.debug("Error during %s", operation, exc_info=True)
        typer.secho(f"✗ {operation} failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(1) from exc


def format_result(result: str | dict[str, Any], *, operation: str | None = None) -> str:
    """Format a command result for CLI display.

    Args:
        result: Rendered text, returned as is, or a mapping shown as a
            checked heading followed by one ``key: value`` line per item.
        operation: Operation name used as the heading for mappings.

    Returns:
        Formatted string ready for CLI display.
    """
    if isinstance(result, str):
        return result

    lines = [f"✓ {operation or 'Result'}"]
    lines.extend(f"  {key}: {value}" for key, value in result.items())
    return "\n".join(lines)


class BaseCLI:
    """Utility base class for CLI command groups."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self.logger = get_logger(__name__)

    def handle_cli_operation(
        self,
        *,
        operation: str,
        op_callable: Callable[[], Any],
        echo_result: bool = True,
    ) -> Any:
        """Run an operation with consistent logging, formatting, and errors.

        Args:
            operation: Human-readable operation name for error handling.
            op_callable: Callable that performs the operation and returns
                a result.
            echo_result: Print the formatted result (default True). Commands
                that render their own output pass False.

        Returns:
            Result from op_callable.
        """
        with handle_errors(operation, logger=self.logger):
            result = op_callable()

        if echo_result:
            typer.echo(format_result(result, operation=operation))
        return result
