"""The built-in ``help`` command."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from jj_cli.cli.parser import styled_help
from jj_cli.exceptions import UsageError

__all__ = ["HelpArgs", "cmd_help"]


@dataclass(frozen=True)
class HelpArgs:
    """Arguments of ``jj help``."""

    command: tuple[str, ...] = ()

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "command",
            nargs="*",
            metavar="COMMAND",
            help="Print help for the subcommand(s)",
        )

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> HelpArgs:
        return cls(tuple(namespace.command or ()))


def cmd_help(ui, context, args: HelpArgs) -> int:
    """Print the top-level help, or the help of one command."""
    schema = context.schema
    styles = schema.presentation.styles

    if not args.command:
        ui.out.print(styled_help(schema.format_help(), styles), end="")
        return 0

    name = args.command[0]
    parser = schema.subparser(name)
    if parser is None:
        raise UsageError(
            f"unrecognized subcommand '{name}'",
            suggestions=[f"Use '{schema.program} help' to list the available commands"],
        )

    ui.out.print(styled_help(parser.format_help(), styles), end="")
    return 0
