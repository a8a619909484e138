"""Presentation settings for the command-line schema.

Help categories and styles only affect how ``--help`` and ``jj help`` lay
out and color the command listing. They never change which names match or
how a command is dispatched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class HelpCategory(Enum):
    """Headings used to group commands in the help listing.

    Declaration order is display order.
    """

    COMMON = "Common Commands"
    EDITING = "Editing Changes"
    REWRITING = "Rewriting Changes"
    WORKING_COPY = "Working Copy"
    FILE_OPERATIONS = "File Operations"
    REVIEW = "Review Commands"
    REFERENCES = "References (Bookmarks & Tags)"
    OPERATION_LOG = "Operation Log"
    WORKSPACE = "Workspace"
    ADVANCED = "Advanced"
    CONFIGURATION_HELP = "Configuration & Help"
    GIT_INTEGRATION = "Git Integration"
    DEVELOPMENT = "Development"

    @property
    def heading(self) -> str:
        return self.value


@dataclass(frozen=True)
class Styles:
    """Rich style strings for the parts of help output."""

    header: str = "bold yellow"
    usage: str = "bold yellow"
    literal: str = "bold green"
    placeholder: str = "green"
    warning: str = "bold yellow"
    error: str = "bold red"
    hint: str = "bold cyan"


@dataclass(frozen=True)
class Presentation:
    """Fixed presentation configuration handed to the schema builder.

    Attributes:
        styles: Styles for headings, usage, command names and placeholders
        category_order: Order in which help categories are listed. Categories
            missing from this tuple are listed after it, in declaration order.
        program: Program name shown in usage lines and messages
    """

    styles: Styles = field(default_factory=Styles)
    category_order: tuple[HelpCategory, ...] = tuple(HelpCategory)
    program: str = "jj"

    def ordered_categories(self) -> list[HelpCategory]:
        ordered = list(dict.fromkeys(self.category_order))
        ordered.extend(c for c in HelpCategory if c not in ordered)
        return ordered


DEFAULT_PRESENTATION = Presentation()
