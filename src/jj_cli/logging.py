"""
Diagnostic logging for jj-cli.

The package logger is silent by default. ``jj --debug`` (or ``[logging]
level`` in the config file) attaches a stderr handler.
"""

import logging

# Package-wide logger; module loggers propagate to it
_logger = logging.getLogger("jj_cli")
_logger.addHandler(logging.NullHandler())  # Default: no output

DEFAULT_FORMAT = "[%(levelname)s %(name)s] %(message)s"


def enable_verbose(level: str = "DEBUG", format: str | None = None) -> None:
    """Enable diagnostic logging on stderr.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string
    """
    _logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Disable diagnostic logging."""
    _logger.setLevel(logging.WARNING)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)
