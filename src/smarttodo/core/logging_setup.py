"""Logging configuration for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


class _ThirdPartyNoiseFilter(logging.Filter):
    """Keep smarttodo logs, drop chatty library logs below WARNING."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("smarttodo"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.WARNING) -> None:
    """Install a single rich handler on the root logger.

    Safe to call more than once; previous handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(level)
    handler.addFilter(_ThirdPartyNoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
