"""Keeping renamed commands working under their old name."""

from __future__ import annotations

import functools
from typing import Any, Callable

__all__ = ["renamed_command"]


def renamed_command(
    old_name: str,
    new_name: str,
    handler: Callable[..., Any],
    program: str = "jj",
) -> Callable[..., Any]:
    """Wrap the handler of a command that was renamed from ``old_name`` to ``new_name``.

    The returned handler has the same signature as ``handler`` and can be
    registered in the catalog under the old name. Each call writes two
    warnings, then runs ``handler`` and returns its result. Errors are not
    caught.

    Example::

        CommandDescriptor("obslog", renamed_command("obslog", "evolog", cmd_evolog), RawArgs)
    """

    @functools.wraps(handler)
    def wrapper(ui, context, args):
        ui.warning(
            f"`{program} {old_name}` is deprecated; use `{program} {new_name}` instead, "
            "which is equivalent"
        )
        ui.warning(
            f"`{program} {old_name}` will be removed in a future version, "
            "and this will be a hard error"
        )
        return handler(ui, context, args)

    return wrapper
