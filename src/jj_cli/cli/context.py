"""Shared state threaded through dispatch to every handler."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jj_cli.capabilities import CapabilitySet
from jj_cli.config import Config

if TYPE_CHECKING:
    from jj_cli.cli.parser import Schema


@dataclass(frozen=True)
class InvocationContext:
    """Per-invocation context passed unchanged to the handler.

    Attributes:
        cwd: Working directory the command was started from
        config: Merged configuration
        capabilities: Features compiled into this build
        schema: The schema the command line was matched against
        matches: Namespace produced by matching the command line
        argv: The raw argument vector, without the program name
    """

    cwd: Path
    config: Config
    capabilities: CapabilitySet
    schema: Schema
    matches: argparse.Namespace = field(default_factory=argparse.Namespace)
    argv: tuple[str, ...] = ()
