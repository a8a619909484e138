"""Tests for command dispatch."""

from dataclasses import replace

import pytest

from jj_cli.capabilities import CapabilitySet
from jj_cli.cli.catalog import Catalog, CommandDescriptor
from jj_cli.cli.command import Command, parse
from jj_cli.cli.command_protocol import RawArgs
from jj_cli.cli.commands import default_catalog
from jj_cli.cli.dispatch import dispatch
from jj_cli.cli.parser import build_schema
from jj_cli.exceptions import DispatchError, InternalError


class TestDispatch:
    """Tests for dispatch()."""

    def test_calls_handler_with_args(self, small_schema, recorder, output, make_context):
        """The matched command's handler gets its decoded args."""
        command = parse(small_schema, small_schema.match(["log", "-n", "1"]))
        dispatch(small_schema, command, output.ui, make_context(small_schema))

        assert recorder.calls == [("log", RawArgs(("-n", "1")))]
        assert output.out == "ran log\n"

    def test_passes_ui_and_context_unchanged(self, small_catalog, output, make_context):
        """Handlers receive the caller's Ui and context objects."""
        seen = []

        def handler(ui, context, args):
            seen.append((ui, context))

        catalog = Catalog([d if d.name != "log" else _replace(d, handler) for d in small_catalog])
        schema = build_schema(catalog, CapabilitySet.all())
        context = make_context(schema)

        dispatch(schema, Command("log", RawArgs()), output.ui, context)

        assert seen == [(output.ui, context)]

    def test_returns_handler_result(self, make_context, output):
        """Whatever the handler returns is returned by dispatch."""
        result = object()
        catalog = Catalog([CommandDescriptor("log", lambda ui, ctx, args: result, RawArgs)])
        schema = build_schema(catalog, CapabilitySet.all())

        assert dispatch(schema, Command("log", RawArgs()), output.ui, make_context(schema)) is result

    def test_handler_error_propagates_unchanged(self, make_context, output):
        """Handler exceptions are neither wrapped nor swallowed."""
        error = KeyError("boom")

        def handler(ui, context, args):
            raise error

        catalog = Catalog([CommandDescriptor("log", handler, RawArgs)])
        schema = build_schema(catalog, CapabilitySet.all())

        with pytest.raises(KeyError) as exc_info:
            dispatch(schema, Command("log", RawArgs()), output.ui, make_context(schema))

        assert exc_info.value is error

    def test_command_without_arm(self, small_schema, output, make_context):
        """A command the schema does not know is an internal error."""
        with pytest.raises(DispatchError) as exc_info:
            dispatch(
                small_schema,
                Command("frobnicate", RawArgs()),
                output.ui,
                make_context(small_schema),
            )

        assert isinstance(exc_info.value, InternalError)
        assert exc_info.value.context == {"command": "frobnicate"}

    def test_disabled_command_has_no_arm(self, small_catalog, recorder, output, make_context):
        """A disabled command is never dispatched."""
        schema = build_schema(small_catalog, CapabilitySet.none())

        with pytest.raises(DispatchError):
            dispatch(schema, Command("git", RawArgs()), output.ui, make_context(schema))

        assert recorder.calls == []


class TestDispatchTotality:
    """Every descriptor compiled into a schema reaches exactly its own handler."""

    @pytest.mark.parametrize(
        "capabilities",
        [CapabilitySet(), CapabilitySet.all(), CapabilitySet.none()],
        ids=["default", "all", "none"],
    )
    def test_every_command_reaches_its_handler(self, capabilities, recorder, output, make_context):
        """Every name and alias of the reference catalog routes to its own handler."""
        handlers = {name: recorder.handler(name) for name in default_catalog().names()}
        catalog = Catalog(_replace(d, handlers[d.name]) for d in default_catalog())
        schema = build_schema(catalog, capabilities, verify=True)

        for descriptor in schema.descriptors():
            for name in descriptor.all_names:
                matches = schema.match([name])
                command = parse(schema, matches)
                dispatch(schema, command, output.ui, make_context(schema, matches))

                assert recorder.calls[-1][0] == descriptor.name

        expected = sum(len(d.all_names) for d in schema.descriptors())
        assert len(recorder.calls) == expected

    def test_small_catalog_totality(self, small_schema, recorder, output, make_context):
        """Each enabled command runs exactly once, in catalog order."""
        for descriptor in small_schema.descriptors():
            command = parse(small_schema, small_schema.match([descriptor.name]))
            dispatch(small_schema, command, output.ui, make_context(small_schema))

        assert [name for name, _ in recorder.calls] == ["log", "show", "evolog", "run", "git"]


def _replace(descriptor, handler):
    return replace(descriptor, handler=handler)
