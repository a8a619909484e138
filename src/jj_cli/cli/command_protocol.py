"""Protocols shared by command descriptors.

Every command names an argument-schema type and a handler:

    from jj_cli.cli.command_protocol import RawArgs

    def cmd_log(ui, context, args: RawArgs) -> None:
        ui.write(f"log called with {list(args.argv)}")

The argument-schema type owns the command's flags. It adds them to the
subparser the schema builder creates for the command, and decodes the
matched namespace into a value the handler receives.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jj_cli.cli.context import InvocationContext
    from jj_cli.ui import Ui


@runtime_checkable
class ArgsSchema(Protocol):
    """Protocol for a command's argument-schema type.

    Methods:
        add_arguments: Register the command's arguments on its subparser.
        from_namespace: Build the decoded argument value from the namespace
            produced by matching the command line.
    """

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None: ...

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> Any: ...


class Handler(Protocol):
    """Signature of every registrable command handler.

    Handlers return None or an integer exit code. Exceptions they raise are
    propagated to the caller as-is.
    """

    def __call__(self, ui: Ui, context: InvocationContext, args: Any) -> int | None: ...


def parser_options(args_type: type) -> dict[str, Any]:
    """Return extra ``add_parser`` keyword arguments an args type asks for."""
    return dict(getattr(args_type, "parser_options", {}))


@dataclass(frozen=True)
class RawArgs:
    """Every token following the command name, untouched.

    Commands whose flags are owned by an external handler use this type, so
    that their options reach the handler without being interpreted here.
    """

    argv: tuple[str, ...] = ()

    # No token can start with NUL, so nothing is ever read as an option.
    parser_options: ClassVar[dict[str, Any]] = {"prefix_chars": "\0", "add_help": False}

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("argv", nargs=argparse.REMAINDER, metavar="ARGS")

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> RawArgs:
        return cls(tuple(getattr(namespace, "argv", None) or ()))


@dataclass(frozen=True)
class NoArgs:
    """Argument type for commands that take no arguments."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        pass

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> NoArgs:
        return cls()
