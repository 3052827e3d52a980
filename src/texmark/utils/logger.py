"""Logging helpers for texmark.

Library modules only ever create loggers under the ``texmark`` namespace
and log at DEBUG. Handlers are the application's business; the command
line installs one through ``enable_debug_logging()`` for ``--verbose``.

Example:
    >>> from texmark.utils.logger import get_logger
    >>> get_logger("lexer.core").name
    'texmark.lexer.core'
"""

from __future__ import annotations

import logging

NAMESPACE = "texmark"

_CLI_FORMAT = "%(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, placed under the texmark namespace.

    Module ``__name__`` values inside the package are used as-is.
    """
    if name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)


def enable_debug_logging() -> None:
    """Send texmark DEBUG records to stderr.

    Only the texmark logger is lowered to DEBUG, so libraries loaded
    alongside keep their own levels.
    """
    logging.basicConfig(format=_CLI_FORMAT)
    logging.getLogger(NAMESPACE).setLevel(logging.DEBUG)
