"""
Exception hierarchy for jj-cli.

Errors fall into three classes:

- User-input errors (:class:`UsageError`): unknown commands and malformed
  arguments, reported by the argument-matching engine.
- Handler errors: whatever a command handler raises. The core passes these
  through untouched; :class:`CommandError` is offered as a convenient base for
  handlers but is never required.
- Internal errors (:class:`InternalError` and subclasses): a catalog, schema and
  dispatcher that disagree with each other. These are defects in the binary,
  never something the user typed, and are reported as bugs.

Example::

    from jj_cli.exceptions import CommandError

    raise CommandError(
        "No such bookmark",
        context={"bookmark": "main"},
        suggestions=["Use `jj bookmark list` to see available bookmarks"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class JjCliError(Exception):
    """
    Base exception for all jj-cli errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (command, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()

    def __rich_console__(self, console, options):
        from rich.text import Text

        yield Text.assemble(("Error: ", "bold red"), self.message)
        for key, value in self.context.items():
            yield Text.assemble("  ", (f"{key}: ", "dim"), str(value))
        for suggestion in self.suggestions:
            yield Text.assemble(("Hint: ", "bold cyan"), suggestion)


class UsageError(JjCliError):
    """
    The command line could not be matched against the schema.

    Raised for unknown command names (including names of commands that are
    not compiled into this build) and for malformed arguments.

    Attributes:
        usage: Usage line of the parser that rejected the input, if known
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        usage: Optional[str] = None,
    ):
        self.usage = usage
        super().__init__(message, context, suggestions)


class CommandError(JjCliError):
    """
    A command handler failed.

    Example::

        raise CommandError(
            "Working copy is stale",
            suggestions=["Run `jj workspace update-stale`"],
        )
    """

    pass


class ConfigError(JjCliError):
    """
    Configuration file could not be read or parsed.

    Example::

        raise ConfigError(
            "Invalid TOML",
            context={"file": "~/.config/jj-cli/config.toml", "line": 3},
        )
    """

    pass


class InternalError(JjCliError):
    """
    The catalog, schema and dispatcher disagree.

    Only a broken build can raise this. It is never a recoverable runtime
    condition and the CLI does not try to recover from it.
    """

    pass


class CatalogError(InternalError):
    """
    The command catalog failed its consistency check.

    Example::

        raise CatalogError(
            "Duplicate command name",
            context={"name": "log", "first": "log", "second": "log"},
        )
    """

    pass


class UnknownCommandError(InternalError):
    """
    The matched arguments name a command the schema does not know.

    The argument parser only ever produces names it was built with, so this
    means the schema and the extractor were built from different catalogs.
    """

    pass


class DispatchError(InternalError):
    """A command value reached the dispatcher without a matching handler."""

    pass


__all__ = [
    "JjCliError",
    "UsageError",
    "CommandError",
    "ConfigError",
    "InternalError",
    "CatalogError",
    "UnknownCommandError",
    "DispatchError",
]
