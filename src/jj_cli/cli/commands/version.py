"""The built-in ``version`` command."""

from jj_cli import __version__


def cmd_version(ui, context, args) -> int:
    ui.write(f"{context.schema.program} {__version__}")
    return 0
