# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"


def configure_logging(verbose: bool = False) -> None:
    """
    Route all timbers loggers through a rich handler on stderr.

    Safe to call more than once; the handler is only installed the first time.
    """
    root = logging.getLogger("timbers")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
