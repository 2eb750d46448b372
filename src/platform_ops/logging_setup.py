"""
Logging configuration for the CLI.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "platform-ops"


def configure_logging(verbose: bool = False) -> None:
    """
    Send ``platform_ops`` logs to stderr through Rich.

    DEBUG when verbose, WARNING otherwise. Safe to call more than once.
    """
    logger = logging.getLogger("platform_ops")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = RichHandler(console=Console(stderr=True), show_path=verbose, rich_tracebacks=True)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
