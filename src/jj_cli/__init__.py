"""
jj-cli: command registry and dispatch for the jj version-control CLI.

The package turns a closed catalog of subcommand descriptors into one
argparse schema, decodes a parsed command line into a single command value,
and routes it to the handler registered for it.

Modules:
    capabilities: Optional build features gating command families
    presentation: Help categories and styles
    ui: Output sink handed to command handlers
    config: TOML configuration loading
    cli: Catalog, schema builder, parser, dispatcher and entry point

Quick Start::

    from jj_cli.cli import build_schema, dispatch, parse
    from jj_cli.cli.commands import default_catalog
    from jj_cli.capabilities import active_capabilities

    schema = build_schema(default_catalog(), active_capabilities())
    command = parse(schema, schema.match(["version"]))
    dispatch(schema, command, ui, context)
"""

__version__ = "0.1.0"

from jj_cli.capabilities import Capability, CapabilitySet
from jj_cli.exceptions import (
    CatalogError,
    CommandError,
    DispatchError,
    InternalError,
    JjCliError,
    UnknownCommandError,
    UsageError,
)
from jj_cli.presentation import HelpCategory, Presentation, Styles
from jj_cli.ui import Ui

__all__ = [
    "__version__",
    "Capability",
    "CapabilitySet",
    "HelpCategory",
    "Presentation",
    "Styles",
    "Ui",
    "JjCliError",
    "UsageError",
    "CommandError",
    "InternalError",
    "CatalogError",
    "UnknownCommandError",
    "DispatchError",
]
