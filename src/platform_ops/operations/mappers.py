"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and the command wrapper
that gives every Typer command the same error handling.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "AppConfigNotFound": 1,
    "ValidationFailed": 2,
    "ValueError": 2,
    "TransportError": 3,
    "RemoteError": 4,
    "MissingFieldError": 5,
}

FALLBACK_EXIT_CODE = 6


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    - 0: Success
    - 1: Local app config file missing (AppConfigNotFound)
    - 2: Invalid configuration (ValidationFailed) or bad input (ValueError)
    - 3: Network/protocol failure (TransportError)
    - 4: Control plane reported errors (RemoteError)
    - 5: Expected response field missing (MissingFieldError)
    - 6: Anything else

    Args:
        exc: Exception to map

    Returns:
        Exit code
    """
    return EXIT_CODES.get(type(exc).__name__, FALLBACK_EXIT_CODE)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function; on failure prints the error (validation
    failures print their full error list) and raises typer.Exit with the
    mapped code, chained from the original exception.

    Args:
        func: Function to execute

    Returns:
        Function result if successful

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except typer.Exit:
        raise
    except Exception as e:
        from .printers import print_error, print_validation_errors
        if type(e).__name__ == "ValidationFailed" and hasattr(e, "errors"):
            print_validation_errors(e.errors)
        print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
