#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration for the workspace CLI.

Console messages meant for the user go through ``output.console``; the
standard ``logging`` tree carries diagnostics only and is rendered on stderr
by Rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "swe_src"


def configure_logging(verbose: bool = False) -> None:
    """Route log records to a RichHandler on stderr.

    Only WARNING and above are shown unless ``verbose`` is set, in which case
    the package logger drops to DEBUG.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )
