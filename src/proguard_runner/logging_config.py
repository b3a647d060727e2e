"""Logger configuration bootstrap for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a rich console handler to the ``proguard_runner`` logger."""

    logger = logging.getLogger("proguard_runner")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
