"""
Schema builder for the jj command line.

Composes the command catalog, filtered by the enabled capabilities, into a
single argparse parser. argparse does the matching; this module decides what
it is allowed to match and how the help output is laid out.

Commands whose capability is disabled are not registered at all, so their
names fail exactly like a typo. Hidden commands are registered but never
listed.
"""

from __future__ import annotations

import argparse
import difflib
import logging
import re
from collections.abc import Sequence
from typing import IO, NoReturn

from rich.text import Text

from jj_cli import __version__
from jj_cli.capabilities import CapabilitySet
from jj_cli.cli.catalog import Catalog, CommandDescriptor
from jj_cli.cli.command_protocol import parser_options
from jj_cli.exceptions import CatalogError, UsageError
from jj_cli.presentation import DEFAULT_PRESENTATION, HelpCategory, Presentation, Styles
from jj_cli.ui import COLOR_CHOICES, make_console

__all__ = ["CommandParser", "Schema", "build_schema", "styled_help"]

logger = logging.getLogger(__name__)

DESCRIPTION = "Jujutsu: a version control system that works on changes, not branches"

EPILOG = "Use '{prog} help <COMMAND>' for more information on a specific command."

# Namespace attribute carrying the canonical name of the matched command
COMMAND_NAME_ATTR = "_command_name"

_INVALID_COMMAND = re.compile(r"^argument <COMMAND>: invalid choice: (['\"])(?P<name>.*?)\1")


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting and lists commands by category."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.styles: Styles = DEFAULT_PRESENTATION.styles
        self.command_sections: list[tuple[str, list[str]]] = []
        self.listed_names: list[str] = []
        # Set by --color while matching; subparsers defer to their parent
        self.color: str | None = None
        self.parent: CommandParser | None = None

    def error(self, message: str) -> NoReturn:
        usage = self.format_usage().strip()
        unknown = _INVALID_COMMAND.match(message)
        if unknown:
            # argparse would print every choice, hidden names included
            name = unknown.group("name")
            similar = difflib.get_close_matches(name, self.listed_names, n=1)
            suggestions = [f"a similar subcommand exists: '{similar[0]}'"] if similar else []
            suggestions.append(f"For more information, try '{self.prog} --help'")
            raise UsageError(
                f"unrecognized subcommand '{name}'", suggestions=suggestions, usage=usage
            )
        raise UsageError(message, usage=usage)

    def format_help(self) -> str:
        formatter = self._get_formatter()

        formatter.add_usage(self.usage, self._actions, self._mutually_exclusive_groups)
        formatter.add_text(self.description)

        for heading, rows in self.command_sections:
            formatter.start_section(heading)
            formatter.add_text("\n".join(rows))
            formatter.end_section()

        for action_group in self._action_groups:
            formatter.start_section(action_group.title)
            formatter.add_text(action_group.description)
            formatter.add_arguments(action_group._group_actions)
            formatter.end_section()

        formatter.add_text(self.epilog)
        return formatter.format_help()

    def color_choice(self) -> str:
        """Return the --color value given on the command line, or "auto"."""
        parser: CommandParser | None = self
        while parser is not None:
            if parser.color is not None:
                return parser.color
            parser = parser.parent
        return "auto"

    def print_help(self, file: IO[str] | None = None) -> None:
        console = make_console(file, stderr=False, color=self.color_choice())
        console.print(styled_help(self.format_help(), self.styles), end="")


class ColorAction(argparse.Action):
    """Store --color and remember it for help printed later in the same match."""

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        parser.color = values


def styled_help(text: str, styles: Styles) -> Text:
    """Apply presentation styles to plain help text."""
    result = Text()
    for line in text.splitlines(keepends=True):
        stripped = line.lstrip(" ")
        indent = len(line) - len(stripped)
        if line.startswith("usage:"):
            result.append("usage:", style=styles.usage)
            result.append(line[len("usage:") :])
        elif indent == 0 and line.rstrip().endswith(":"):
            result.append(line, style=styles.header)
        elif indent == 2 and stripped.strip():
            word, sep, rest = stripped.partition(" ")
            result.append(line[:indent])
            result.append(word, style=styles.literal)
            result.append(sep + rest)
        else:
            result.append(line)
    result.highlight_regex(r"<[A-Z_]+>", styles.placeholder)
    return result


class Schema:
    """The built command-line schema.

    Immutable once built; safe to reuse for several invocations.

    Attributes:
        parser: Top-level argparse parser
        catalog: Catalog the schema was built from
        capabilities: Capabilities the schema was built for
        presentation: Presentation settings used for help output
    """

    def __init__(
        self,
        parser: CommandParser,
        catalog: Catalog,
        capabilities: CapabilitySet,
        presentation: Presentation,
        descriptors: dict[str, CommandDescriptor],
        names: dict[str, str],
        subparsers: dict[str, CommandParser],
    ):
        self.parser = parser
        self.catalog = catalog
        self.capabilities = capabilities
        self.presentation = presentation
        self._descriptors = descriptors
        self._names = names
        self._subparsers = subparsers

    @property
    def program(self) -> str:
        return self.presentation.program

    def match(self, argv: Sequence[str]) -> argparse.Namespace:
        """Match an argument vector against the schema.

        Raises:
            UsageError: For unknown commands and malformed arguments.
        """
        self.parser.color = None
        return self.parser.parse_args(list(argv))

    def descriptors(self) -> list[CommandDescriptor]:
        """Enabled descriptors, in catalog order."""
        return list(self._descriptors.values())

    def get(self, name: str) -> CommandDescriptor | None:
        """Return the enabled descriptor with this canonical name."""
        return self._descriptors.get(name)

    def resolve(self, name: str) -> str | None:
        """Resolve a name or alias to its canonical name."""
        return self._names.get(name)

    def matchable_names(self) -> set[str]:
        return set(self._names)

    def subparser(self, name: str) -> CommandParser | None:
        """Return the parser for a command, looked up by name or alias."""
        canonical = self.resolve(name)
        return self._subparsers.get(canonical) if canonical else None

    def listing(self) -> list[tuple[HelpCategory, list[CommandDescriptor]]]:
        """Listed commands grouped by help category, in display order.

        Hidden commands are left out; empty categories are dropped.
        """
        sections = []
        for category in self.presentation.ordered_categories():
            entries = [
                d for d in self._descriptors.values() if d.help_category is category and not d.hidden
            ]
            if entries:
                sections.append((category, entries))
        return sections

    def format_help(self) -> str:
        return self.parser.format_help()

    def print_help(self, file: IO[str] | None = None) -> None:
        self.parser.print_help(file)

    def debug_assert(self) -> None:
        """Check the schema and its catalog for consistency.

        Raises:
            CatalogError: If the catalog is inconsistent or the schema does
                not register exactly the enabled descriptors.
        """
        self.catalog.debug_assert()

        problems = []
        for descriptor in self.catalog:
            enabled = self.capabilities.satisfies(descriptor.requires)
            for name in descriptor.all_names:
                registered = self._names.get(name)
                if enabled and registered != descriptor.name:
                    problems.append(f"{name!r} is not registered for '{descriptor.name}'")
                if not enabled and registered is not None:
                    problems.append(f"{name!r} is registered although its feature is disabled")
            if enabled and descriptor.name not in self._subparsers:
                problems.append(f"'{descriptor.name}' has no parser")

        if problems:
            raise CatalogError(
                "Command schema does not match its catalog",
                context={"problems": "; ".join(problems)},
            )


def _listing_rows(entries: list[CommandDescriptor]) -> list[str]:
    width = max(len(d.name) for d in entries)
    rows = []
    for descriptor in entries:
        summary = descriptor.help
        if descriptor.aliases:
            summary = f"{summary} [aliases: {', '.join(descriptor.aliases)}]".strip()
        rows.append(f"{descriptor.name:<{width}}  {summary}".rstrip())
    return rows


def build_schema(
    catalog: Catalog,
    capabilities: CapabilitySet,
    presentation: Presentation = DEFAULT_PRESENTATION,
    *,
    verify: bool = False,
) -> Schema:
    """Build the command-line schema.

    Args:
        catalog: Every known command
        capabilities: Enabled features; commands needing anything else are
            left out completely
        presentation: Styles, category order and program name
        verify: Run the full consistency check before building

    Returns:
        The built schema

    Raises:
        CatalogError: If two enabled commands share a name, or if ``verify``
            is set and the catalog is inconsistent
    """
    if verify:
        catalog.debug_assert()

    program = presentation.program
    parser = CommandParser(
        prog=program,
        usage="%(prog)s [OPTIONS] <COMMAND>",
        description=DESCRIPTION,
        epilog=EPILOG.format(prog=program),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.styles = presentation.styles
    parser.add_argument("--version", action="version", version=f"{program} {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        dest="global_verbose",
        help="Show full stack traces on errors",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        dest="global_debug",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--color",
        action=ColorAction,
        choices=COLOR_CHOICES,
        dest="global_color",
        default=None,
        help="When to colorize output",
    )

    subparsers = parser.add_subparsers(
        dest="command", metavar="<COMMAND>", help=argparse.SUPPRESS, parser_class=CommandParser
    )

    descriptors: dict[str, CommandDescriptor] = {}
    names: dict[str, str] = {}
    command_parsers: dict[str, CommandParser] = {}

    for descriptor in catalog:
        if not capabilities.satisfies(descriptor.requires):
            logger.debug(
                "Leaving out '%s': feature '%s' is disabled",
                descriptor.name,
                descriptor.requires.value,
            )
            continue

        for name in descriptor.all_names:
            if name in names:
                raise CatalogError(
                    f"Duplicate command name {name!r}",
                    context={"first": names[name], "second": descriptor.name},
                )
            names[name] = descriptor.name

        sub = subparsers.add_parser(
            descriptor.name,
            aliases=[*descriptor.aliases, *descriptor.hidden_aliases],
            prog=f"{program} {descriptor.name}",
            description=descriptor.help or None,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            **parser_options(descriptor.args_type),
        )
        sub.styles = presentation.styles
        sub.parent = parser
        descriptor.args_type.add_arguments(sub)
        sub.set_defaults(**{COMMAND_NAME_ATTR: descriptor.name})

        descriptors[descriptor.name] = descriptor
        command_parsers[descriptor.name] = sub

    schema = Schema(
        parser,
        catalog,
        capabilities,
        presentation,
        descriptors,
        names,
        command_parsers,
    )
    listing = schema.listing()
    parser.command_sections = [
        (category.heading, _listing_rows(entries)) for category, entries in listing
    ]
    parser.listed_names = [
        name for _, entries in listing for d in entries for name in (d.name, *d.aliases)
    ]

    logger.debug(
        "Built schema with %d of %d commands (%s)",
        len(descriptors),
        len(catalog),
        ", ".join(capabilities.names()) or "no features",
    )
    return schema
