"""
Command dispatch for the jj CLI.

Routes a decoded Command to the one handler registered for it. The handler
receives the output sink and the invocation context unchanged; whatever it
returns or raises reaches the caller untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jj_cli.exceptions import DispatchError

if TYPE_CHECKING:
    from jj_cli.cli.command import Command
    from jj_cli.cli.context import InvocationContext
    from jj_cli.cli.parser import Schema
    from jj_cli.ui import Ui

__all__ = ["dispatch"]

logger = logging.getLogger(__name__)


def dispatch(schema: Schema, command: Command, ui: Ui, context: InvocationContext) -> Any:
    """Invoke the handler for a command.

    Args:
        schema: Schema the command was parsed with; one dispatch arm exists
            for each descriptor compiled into it
        command: The decoded command
        ui: Output sink, passed through
        context: Invocation context, passed through

    Returns:
        Whatever the handler returns.

    Raises:
        DispatchError: If no compiled-in descriptor matches the command.
            Exceptions raised by the handler propagate unchanged.
    """
    descriptor = schema.get(command.name)
    if descriptor is None:
        raise DispatchError(
            f"No handler for command '{command.name}'",
            context={"command": command.name},
            suggestions=["Every catalog entry needs a dispatch arm; this is a bug"],
        )

    logger.debug("Dispatching '%s' to %s", command.name, _handler_name(descriptor.handler))
    return descriptor.handler(ui, context, command.args)


def _handler_name(handler: Any) -> str:
    module = getattr(handler, "__module__", None)
    name = getattr(handler, "__qualname__", None) or repr(handler)
    return f"{module}.{name}" if module else name
