"""Shared utilities for the CLI entry point."""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING

from jj_cli.exceptions import InternalError, JjCliError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    Returns a console configured for stderr with appropriate settings.
    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None, highlight=False, emoji=False)
    return _error_console


def print_error(
    e: BaseException,
    verbose: bool = False,
    use_rich: bool | None = None,
    console: Console | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Uses Rich console for error output on TTY terminals, falls back to plain
    text for non-TTY (pipes, captured output, etc.).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
        console: Console to print to (default: the shared stderr console)
    """
    if console is None:
        console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        # Always use plain text for stack traces
        print("".join(traceback.format_exception(type(e), e, e.__traceback__)), file=console.file)
        return

    if use_rich and isinstance(e, JjCliError):
        console.print(e)
    else:
        print(format_error(e), file=console.file)


def format_error(e: BaseException, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return "".join(traceback.format_exception(type(e), e, e.__traceback__))

    if isinstance(e, InternalError):
        return f"Internal error: {e}"

    if isinstance(e, JjCliError):
        return f"Error: {e}"

    # For other exceptions, show type and message
    return f"Error: {type(e).__name__}: {e}"
