"""Pytest fixtures for jj-cli tests."""

import argparse
import io
from dataclasses import dataclass
from pathlib import Path

import pytest

from jj_cli.capabilities import Capability, CapabilitySet, active_capabilities
from jj_cli.cli.catalog import Catalog, CommandDescriptor
from jj_cli.cli.command_protocol import NoArgs, RawArgs
from jj_cli.cli.context import InvocationContext
from jj_cli.cli.parser import build_schema
from jj_cli.config import Config
from jj_cli.logging import disable_verbose
from jj_cli.presentation import HelpCategory
from jj_cli.ui import Ui


@dataclass(frozen=True)
class FlagArgs:
    """Argument type with a single boolean flag."""

    flag: bool = False

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--flag", action="store_true")

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> "FlagArgs":
        return cls(namespace.flag)


class Recorder:
    """Handler factory that records every call it sees."""

    def __init__(self):
        self.calls = []

    def handler(self, name, result=None):
        def handle(ui, context, args):
            self.calls.append((name, args))
            ui.write(f"ran {name}")
            return result

        handle.__qualname__ = f"handle_{name.replace('-', '_')}"
        return handle


class Output:
    """A Ui writing to in-memory buffers."""

    def __init__(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.ui = Ui(stdout=self.stdout, stderr=self.stderr, color="never")

    @property
    def out(self) -> str:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config, feature selection, discovered handlers and logging out of every test."""
    monkeypatch.setattr("jj_cli.config.USER_CONFIG_PATH", tmp_path / "no-user-config.toml")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JJ_CLI_FEATURES", raising=False)
    monkeypatch.setattr("jj_cli.cli.registry._registry", {})
    monkeypatch.setattr("jj_cli.cli.registry._failures", {})
    active_capabilities.cache_clear()
    yield
    active_capabilities.cache_clear()
    disable_verbose()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def output():
    return Output()


@pytest.fixture
def small_catalog(recorder):
    """Catalog with aliases, a hidden command and a gated command."""
    return Catalog(
        [
            CommandDescriptor(
                "log",
                recorder.handler("log"),
                RawArgs,
                help="Show revision history",
                help_category=HelpCategory.COMMON,
            ),
            CommandDescriptor(
                "show",
                recorder.handler("show"),
                FlagArgs,
                help="Show a revision",
                help_category=HelpCategory.COMMON,
            ),
            CommandDescriptor(
                "evolog",
                recorder.handler("evolog"),
                RawArgs,
                help="Show how a change has evolved",
                aliases=("evolution-log",),
                hidden_aliases=("obslog",),
                help_category=HelpCategory.REVIEW,
            ),
            CommandDescriptor(
                "run",
                recorder.handler("run"),
                NoArgs,
                help="Run a command across revisions",
                hidden=True,
            ),
            CommandDescriptor(
                "git",
                recorder.handler("git"),
                RawArgs,
                help="Work with Git remotes",
                help_category=HelpCategory.GIT_INTEGRATION,
                requires=Capability.GIT,
            ),
        ]
    )


@pytest.fixture
def small_schema(small_catalog):
    return build_schema(small_catalog, CapabilitySet.all())


@pytest.fixture
def make_context(tmp_path):
    """Build an invocation context for a schema."""

    def make(schema, matches=None):
        return InvocationContext(
            cwd=Path(tmp_path),
            config=Config(),
            capabilities=schema.capabilities,
            schema=schema,
            matches=matches if matches is not None else argparse.Namespace(),
        )

    return make
