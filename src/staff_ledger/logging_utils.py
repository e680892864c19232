"""Application-wide logging setup.

Modules use ``logging.getLogger(__name__)``; ``configure_logging`` installs a
single stream handler on the package logger so repeated ``create_app`` calls
(tests, reloader) do not stack handlers.
"""

from __future__ import annotations

import logging

_CONFIGURED = False


def configure_logging(level: int = logging.INFO) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logger = logging.getLogger("staff_ledger")
    logger.setLevel(level)
    logger.addHandler(handler)
    _CONFIGURED = True
