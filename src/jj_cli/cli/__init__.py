"""
Command-line interface for jj.

One invocation runs through these steps:

    capabilities -> catalog -> build_schema -> Schema.match -> parse -> dispatch

Examples:
    jj log -r main
    jj evolog            (also: jj evolution-log)
    jj op log            (op is an alias of operation)
    jj help bookmark
    JJ_CLI_FEATURES=git,bench jj bench

Exit codes:
    0    success
    1    the command failed
    2    the command line could not be parsed
    255  internal error (a bug)
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from jj_cli.capabilities import active_capabilities
from jj_cli.cli.catalog import Catalog, CommandDescriptor
from jj_cli.cli.command import Command, parse
from jj_cli.cli.context import InvocationContext
from jj_cli.cli.deprecation import renamed_command
from jj_cli.cli.dispatch import dispatch
from jj_cli.cli.parser import Schema, build_schema, styled_help
from jj_cli.cli.registry import discover_handlers, get_load_failures
from jj_cli.cli.utils import print_error
from jj_cli.config import Config
from jj_cli.exceptions import InternalError, JjCliError, UsageError
from jj_cli.logging import enable_verbose
from jj_cli.ui import Ui

__all__ = [
    "main",
    "Catalog",
    "Command",
    "CommandDescriptor",
    "InvocationContext",
    "Schema",
    "build_schema",
    "dispatch",
    "parse",
    "renamed_command",
]

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_BUG = 255


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the jj CLI."""
    from jj_cli.cli.commands import default_catalog

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    ui = Ui()
    try:
        capabilities = active_capabilities()
        handlers = discover_handlers()
        schema = build_schema(default_catalog(handlers, get_load_failures()), capabilities)
    except JjCliError as e:
        print_error(e, console=ui.err)
        return EXIT_BUG if isinstance(e, InternalError) else EXIT_FAILURE

    try:
        matches = schema.match(argv)
    except UsageError as e:
        _print_usage_error(ui, e)
        return EXIT_USAGE

    verbose = matches.global_verbose
    try:
        config = Config.load()
    except JjCliError as e:
        print_error(e, verbose=verbose, console=ui.err)
        return EXIT_FAILURE

    verbose = verbose or config.ui.verbose
    if matches.global_debug:
        enable_verbose("DEBUG")
    elif config.logging.level != "WARNING":
        enable_verbose(config.logging.level)

    ui = Ui(color=matches.global_color or config.ui.color, styles=schema.presentation.styles)

    if matches.command is None:
        ui.out.print(styled_help(schema.format_help(), schema.presentation.styles), end="")
        return 0

    context = InvocationContext(
        cwd=Path.cwd(),
        config=config,
        capabilities=capabilities,
        schema=schema,
        matches=matches,
        argv=tuple(argv),
    )

    try:
        command = parse(schema, matches)
        result = dispatch(schema, command, ui, context)
    except InternalError as e:
        print_error(e, verbose=verbose, console=ui.err)
        ui.hint("This is a bug in jj; please report it")
        return EXIT_BUG
    except UsageError as e:
        _print_usage_error(ui, e)
        return EXIT_USAGE
    except Exception as e:
        print_error(e, verbose=verbose, console=ui.err)
        return EXIT_FAILURE

    return result if isinstance(result, int) else 0


def _print_usage_error(ui: Ui, e: UsageError) -> None:
    ui.error(e.message)
    for suggestion in e.suggestions:
        ui.hint(suggestion)
    if e.usage:
        ui.err.print(e.usage, markup=False)
