"""Command descriptors and the catalog that holds them.

The catalog is the closed list of every command the CLI knows about,
including commands that need a capability this build does not enable.
It is built once at startup and never modified.

Usage:
    from jj_cli.cli.catalog import Catalog, CommandDescriptor

    catalog = Catalog([
        CommandDescriptor("log", cmd_log, RawArgs, help="Show revision history"),
        CommandDescriptor("show", cmd_show, RawArgs, aliases=("s",)),
    ])
    catalog.debug_assert()
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from jj_cli.capabilities import Capability
from jj_cli.cli.command_protocol import ArgsSchema, Handler
from jj_cli.exceptions import CatalogError
from jj_cli.presentation import HelpCategory

NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


@dataclass(frozen=True)
class CommandDescriptor:
    """Catalog entry for one subcommand.

    Attributes:
        name: Canonical name, unique across all names and aliases
        handler: Callable invoked as ``handler(ui, context, args)``
        args_type: Argument-schema type (see ``ArgsSchema``)
        help: One-line summary shown in listings
        aliases: Alternative names shown in listings
        hidden_aliases: Alternative names that match but are never listed
        hidden: Matchable but excluded from listings
        help_category: Listing heading; has no effect on matching
        requires: Capability that must be enabled for the command to exist
    """

    name: str
    handler: Handler
    args_type: type
    help: str = ""
    aliases: tuple[str, ...] = ()
    hidden_aliases: tuple[str, ...] = ()
    hidden: bool = False
    help_category: HelpCategory = HelpCategory.ADVANCED
    requires: Capability | None = None

    @property
    def all_names(self) -> tuple[str, ...]:
        """Canonical name followed by every alias."""
        return (self.name, *self.aliases, *self.hidden_aliases)

    def problems(self) -> list[str]:
        """Return descriptions of everything malformed about this entry."""
        problems = []
        for name in self.all_names:
            if not isinstance(name, str) or not NAME_PATTERN.match(name):
                problems.append(f"'{self.name}': invalid command name {name!r}")
        if not callable(self.handler):
            problems.append(f"'{self.name}': handler is not callable")
        if not isinstance(self.args_type, ArgsSchema):
            problems.append(
                f"'{self.name}': args type must define add_arguments() and from_namespace()"
            )
        if not isinstance(self.help_category, HelpCategory):
            problems.append(f"'{self.name}': help category must be a HelpCategory")
        if self.requires is not None and not isinstance(self.requires, Capability):
            problems.append(f"'{self.name}': requirement must be a Capability or None")
        return problems


class Catalog:
    """Immutable, ordered collection of command descriptors."""

    def __init__(self, descriptors: Iterable[CommandDescriptor]):
        self._descriptors: tuple[CommandDescriptor, ...] = tuple(descriptors)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return any(d.name == name for d in self._descriptors)

    def get(self, name: str) -> CommandDescriptor | None:
        """Return the descriptor with this canonical name, if any."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def debug_assert(self) -> None:
        """Check the catalog for internal consistency.

        Every name and alias must be unique across the whole catalog,
        including descriptors whose capability is disabled in this build:
        the names of gated commands stay reserved.

        Raises:
            CatalogError: On the first batch of problems found. This is a
                programming error and must never be caught.
        """
        problems: list[str] = []
        owners: dict[str, str] = {}

        for descriptor in self._descriptors:
            if not isinstance(descriptor, CommandDescriptor):
                problems.append(f"not a CommandDescriptor: {descriptor!r}")
                continue
            problems.extend(descriptor.problems())
            for name in descriptor.all_names:
                owner = owners.get(name)
                if owner is None:
                    owners[name] = descriptor.name
                elif owner == descriptor.name and name != descriptor.name:
                    problems.append(f"'{descriptor.name}': alias {name!r} listed twice")
                else:
                    problems.append(
                        f"duplicate command name {name!r} (used by '{owner}' and '{descriptor.name}')"
                    )

        if problems:
            raise CatalogError(
                "Command catalog is inconsistent",
                context={"problems": "; ".join(problems)},
                suggestions=["Fix the command catalog; this is a bug in the build"],
            )
