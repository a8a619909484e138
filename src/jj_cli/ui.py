"""Output sink handed to every command handler.

Primary output goes to stdout. Warnings, hints and errors go to stderr so
that scripted use of stdout is never polluted by advisory messages.
"""

from __future__ import annotations

from typing import IO, Literal

from rich.console import Console
from rich.text import Text

from jj_cli.presentation import DEFAULT_PRESENTATION, Styles

ColorChoice = Literal["auto", "always", "never"]

COLOR_CHOICES: tuple[str, ...] = ("auto", "always", "never")


def make_console(file: IO[str] | None, stderr: bool, color: ColorChoice) -> Console:
    """Create a console honoring the color choice."""
    kwargs: dict = {"highlight": False, "soft_wrap": True, "emoji": False}
    if file is not None:
        kwargs["file"] = file
    else:
        kwargs["stderr"] = stderr
    if color == "never":
        kwargs["no_color"] = True
        kwargs["color_system"] = None
    elif color == "always":
        kwargs["force_terminal"] = True
    return Console(**kwargs)


class Ui:
    """Terminal output for one invocation.

    Args:
        stdout: Stream for primary output (default: ``sys.stdout``)
        stderr: Stream for warnings and errors (default: ``sys.stderr``)
        color: ``auto``, ``always`` or ``never``
        styles: Styles used for warning/hint/error headings
    """

    def __init__(
        self,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
        color: ColorChoice = "auto",
        styles: Styles = DEFAULT_PRESENTATION.styles,
    ):
        self.color = color
        self.styles = styles
        self.out = make_console(stdout, stderr=False, color=color)
        self.err = make_console(stderr, stderr=True, color=color)

    def write(self, text: str | Text = "") -> None:
        """Write one line of primary output."""
        self.out.print(text, markup=False)

    def warning(self, message: str) -> None:
        """Write one line to the warning channel."""
        self.err.print(Text.assemble(("Warning: ", self.styles.warning), message))

    def hint(self, message: str) -> None:
        self.err.print(Text.assemble(("Hint: ", self.styles.hint), message))

    def error(self, message: str) -> None:
        self.err.print(Text.assemble(("Error: ", self.styles.error), message))
