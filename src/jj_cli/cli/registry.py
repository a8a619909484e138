"""Handler registry for the jj CLI.

Command handlers live outside this package. Distributions provide them as
entry points in the ``jj_cli.commands`` group, named after the canonical
command they implement:

    [project.entry-points."jj_cli.commands"]
    log = "jj_log.cmd:cmd_log"
    bookmark = "jj_bookmark:cmd_bookmark"

Usage:
    from jj_cli.cli.registry import discover_handlers

    handlers = discover_handlers()
    catalog = default_catalog(handlers)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from importlib import metadata
from typing import Any

__all__ = ["ENTRY_POINT_GROUP", "discover_handlers", "get_load_failures", "get_registry"]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "jj_cli.commands"

# Handlers found by the last discover_handlers() call
_registry: dict[str, Callable[..., Any]] = {}

# Why each rejected entry point was skipped, by command name
_failures: dict[str, str] = {}


def discover_handlers(
    entry_points: Iterable[metadata.EntryPoint] | None = None,
) -> dict[str, Callable[..., Any]]:
    """Load command handlers from installed entry points.

    Entry points that fail to load or do not resolve to a callable are
    skipped with a warning in the log, so one broken plugin cannot take the
    whole CLI down. The reason is kept for ``get_load_failures()``.

    Args:
        entry_points: Entry points to load (default: the ``jj_cli.commands``
            group of all installed distributions)

    Returns:
        Dict mapping command names to handlers.
    """
    if entry_points is None:
        entry_points = metadata.entry_points().select(group=ENTRY_POINT_GROUP)

    handlers: dict[str, Callable[..., Any]] = {}
    failures: dict[str, str] = {}
    for ep in sorted(entry_points, key=lambda e: e.name):
        try:
            handler = ep.load()
        except Exception as e:
            logger.warning("Cannot load handler for '%s' from %s: %s", ep.name, ep.value, e)
            failures.setdefault(ep.name, f"{type(e).__name__}: {e}")
            continue
        if not callable(handler):
            logger.warning("Handler for '%s' from %s is not callable", ep.name, ep.value)
            failures.setdefault(ep.name, f"{ep.value} is not callable")
            continue
        if ep.name in handlers:
            logger.warning("Ignoring second handler for '%s' from %s", ep.name, ep.value)
            continue
        handlers[ep.name] = handler
        logger.debug("Loaded handler for '%s' from %s", ep.name, ep.value)

    global _registry, _failures
    _registry = handlers
    _failures = {name: error for name, error in failures.items() if name not in handlers}
    return handlers


def get_registry() -> dict[str, Callable[..., Any]]:
    """Return the handlers found by the last discovery."""
    return _registry


def get_load_failures() -> dict[str, str]:
    """Return load errors of the last discovery, by command name.

    Names that still ended up with a working handler are left out.
    """
    return _failures
