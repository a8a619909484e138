"""Decoding a matched command line into a single command value."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jj_cli.cli.parser import COMMAND_NAME_ATTR
from jj_cli.exceptions import UnknownCommandError

if TYPE_CHECKING:
    from jj_cli.cli.parser import Schema

__all__ = ["Command", "parse"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """One decoded invocation.

    There is exactly one variant per catalog descriptor, identified by its
    canonical name; ``args`` holds the value decoded by that descriptor's
    argument-schema type.
    """

    name: str
    args: Any


def parse(schema: Schema, matches: argparse.Namespace) -> Command:
    """Project a matched namespace into a Command.

    Args:
        schema: Schema the namespace was matched against
        matches: Namespace returned by ``schema.match()``; any alias has
            already been resolved to the canonical name

    Returns:
        The Command for the matched descriptor

    Raises:
        UnknownCommandError: If the namespace names no command known to the
            schema. The parser never produces such a namespace from user
            input, so this is a defect rather than a typo.
    """
    name = getattr(matches, COMMAND_NAME_ATTR, None)
    descriptor = schema.get(name) if name is not None else None
    if descriptor is None:
        raise UnknownCommandError(
            "Matched arguments name a command missing from the schema",
            context={"command": name},
            suggestions=["The schema and the parser were built from different catalogs"],
        )

    args = descriptor.args_type.from_namespace(matches)
    logger.debug("Parsed command '%s'", descriptor.name)
    return Command(descriptor.name, args)
