"""The reference command catalog.

Lists every top-level ``jj`` command with its help category, aliases and
feature requirement. ``help`` and ``version`` are handled here; every other
command is handled by whichever installed distribution provides it (see
``jj_cli.cli.registry``). A command with no provider stays in the catalog
and fails with a ``CommandError`` when run.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jj_cli.capabilities import Capability
from jj_cli.cli.catalog import Catalog, CommandDescriptor
from jj_cli.cli.command_protocol import NoArgs, RawArgs
from jj_cli.cli.commands.help import HelpArgs, cmd_help
from jj_cli.cli.commands.version import cmd_version
from jj_cli.exceptions import CommandError
from jj_cli.presentation import HelpCategory

__all__ = ["REFERENCE_COMMANDS", "default_catalog", "missing_handler"]

# name, help, category, extra descriptor fields
REFERENCE_COMMANDS: list[tuple[str, str, HelpCategory, dict[str, Any]]] = [
    ("abandon", "Abandon a revision", HelpCategory.EDITING, {}),
    (
        "absorb",
        "Move changes from a revision into the stack of mutable revisions",
        HelpCategory.REWRITING,
        {},
    ),
    (
        "bench",
        "Commands for benchmarking internal operations",
        HelpCategory.DEVELOPMENT,
        {"requires": Capability.BENCH},
    ),
    ("bisect", "Find a bad revision by bisection", HelpCategory.ADVANCED, {}),
    ("bookmark", "Manage bookmarks", HelpCategory.REFERENCES, {}),
    (
        "commit",
        "Update the description and create a new change on top",
        HelpCategory.COMMON,
        {},
    ),
    ("config", "Manage config options", HelpCategory.CONFIGURATION_HELP, {}),
    ("debug", "Low-level commands not intended for users", HelpCategory.CONFIGURATION_HELP, {}),
    ("describe", "Update the change description or other metadata", HelpCategory.EDITING, {}),
    ("diff", "Compare file contents between two revisions", HelpCategory.COMMON, {}),
    (
        "diffedit",
        "Touch up the content changes in a revision with a diff editor",
        HelpCategory.REWRITING,
        {},
    ),
    (
        "duplicate",
        "Create new changes with the same content as existing ones",
        HelpCategory.EDITING,
        {},
    ),
    ("edit", "Set the specified revision as the working-copy revision", HelpCategory.EDITING, {}),
    (
        "evolog",
        "Show how a change has evolved over time",
        HelpCategory.REVIEW,
        {"aliases": ("evolution-log",), "hidden_aliases": ("obslog",)},
    ),
    ("file", "File operations", HelpCategory.FILE_OPERATIONS, {}),
    ("fix", "Update files with formatting fixes or other changes", HelpCategory.ADVANCED, {}),
    (
        "gerrit",
        "Interact with Gerrit Code Review",
        HelpCategory.GIT_INTEGRATION,
        {"requires": Capability.GIT},
    ),
    (
        "git",
        "Commands for working with Git remotes and the underlying Git repo",
        HelpCategory.GIT_INTEGRATION,
        {"requires": Capability.GIT},
    ),
    ("interdiff", "Compare the changes of two commits", HelpCategory.REVIEW, {}),
    ("log", "Show revision history", HelpCategory.COMMON, {}),
    (
        "metaedit",
        "Modify the metadata of a revision without changing its content",
        HelpCategory.EDITING,
        {},
    ),
    ("new", "Create a new, empty change and edit it in the working copy", HelpCategory.EDITING, {}),
    ("next", "Move the working-copy commit to the child revision", HelpCategory.WORKING_COPY, {}),
    (
        "operation",
        "Commands for working with the operation log",
        HelpCategory.OPERATION_LOG,
        {"aliases": ("op",)},
    ),
    ("parallelize", "Parallelize revisions by making them siblings", HelpCategory.REWRITING, {}),
    (
        "prev",
        "Change the working copy revision relative to the parent revision",
        HelpCategory.WORKING_COPY,
        {},
    ),
    ("rebase", "Move revisions to different parent(s)", HelpCategory.REWRITING, {}),
    ("redo", "Redo the most recently undone operation", HelpCategory.OPERATION_LOG, {}),
    (
        "resolve",
        "Resolve conflicted files with an external merge tool",
        HelpCategory.FILE_OPERATIONS,
        {},
    ),
    ("restore", "Restore paths from another revision", HelpCategory.EDITING, {}),
    ("revert", "Apply the reverse of the given revision(s)", HelpCategory.EDITING, {}),
    ("root", "Show the current workspace root directory", HelpCategory.WORKSPACE, {}),
    (
        "run",
        "Run a command across a set of revisions",
        HelpCategory.ADVANCED,
        {"hidden": True},
    ),
    ("show", "Show commit description and changes in a revision", HelpCategory.COMMON, {}),
    ("sign", "Cryptographically sign a revision", HelpCategory.ADVANCED, {}),
    (
        "simplify-parents",
        "Simplify parent edges for the specified revision(s)",
        HelpCategory.REWRITING,
        {},
    ),
    (
        "sparse",
        "Manage which paths from the working-copy commit are present in the working copy",
        HelpCategory.FILE_OPERATIONS,
        {},
    ),
    ("split", "Split a revision in two", HelpCategory.REWRITING, {}),
    ("squash", "Move changes from a revision into another revision", HelpCategory.REWRITING, {}),
    ("status", "Show high-level repo status", HelpCategory.COMMON, {}),
    ("tag", "Manage tags", HelpCategory.REFERENCES, {}),
    ("undo", "Undo the last operation", HelpCategory.OPERATION_LOG, {}),
    ("unsign", "Drop a cryptographic signature", HelpCategory.ADVANCED, {}),
    (
        "util",
        "Infrequently used commands such as for generating shell completions",
        HelpCategory.CONFIGURATION_HELP,
        {},
    ),
    ("workspace", "Commands for working with workspaces", HelpCategory.WORKSPACE, {}),
]


def missing_handler(
    name: str, program: str = "jj", load_error: str | None = None
) -> Callable[..., Any]:
    """Return a handler for a command that no installed distribution provides.

    Args:
        name: Canonical command name
        program: Program name used in the message
        load_error: Why an installed handler for this command could not be
            loaded, if there was one
    """
    if load_error:
        message = f"`{program} {name}` is not available: its handler failed to load"
        error_context = {"command": name, "error": load_error}
        suggestions = [
            f"The '{name}' entry point in the 'jj_cli.commands' group raised: {load_error}",
            "Reinstall or fix the package providing it",
        ]
    else:
        message = f"`{program} {name}` is not available: no handler is installed for it"
        error_context = {"command": name}
        suggestions = [
            f"Install a package providing the '{name}' entry point "
            "in the 'jj_cli.commands' group"
        ]

    def handler(ui, context, args):
        raise CommandError(message, context=dict(error_context), suggestions=list(suggestions))

    handler.__qualname__ = f"missing_handler.<{name}>"
    return handler


def default_catalog(
    handlers: Mapping[str, Callable[..., Any]] | None = None,
    failures: Mapping[str, str] | None = None,
) -> Catalog:
    """Build the reference catalog.

    Args:
        handlers: Handlers by canonical command name, usually from
            ``discover_handlers()``. Built-in commands ignore this mapping.
        failures: Load errors by command name, usually from
            ``get_load_failures()``. Shown when a command without a handler
            is run.

    Returns:
        Catalog of every command, in alphabetical order.
    """
    handlers = handlers or {}
    failures = failures or {}

    descriptors = [
        CommandDescriptor(
            name,
            handlers.get(name) or missing_handler(name, load_error=failures.get(name)),
            RawArgs,
            help=summary,
            help_category=category,
            **extra,
        )
        for name, summary, category, extra in REFERENCE_COMMANDS
    ]
    descriptors.append(
        CommandDescriptor(
            "help",
            cmd_help,
            HelpArgs,
            help="Print this message or the help of the given subcommand(s)",
            help_category=HelpCategory.CONFIGURATION_HELP,
        )
    )
    descriptors.append(
        CommandDescriptor(
            "version",
            cmd_version,
            NoArgs,
            help="Display version information",
            help_category=HelpCategory.CONFIGURATION_HELP,
        )
    )
    return Catalog(sorted(descriptors, key=lambda d: d.name))
