"""Logging helpers for prettymark.

Every module logs through a standard library logger in the ``prettymark``
namespace. The package root carries a NullHandler and nothing else, so
applications decide where (and whether) records go.

Example:
    >>> import logging
    >>> logging.getLogger("prettymark").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "prettymark"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under the prettymark namespace.

    Module names already inside the package (``prettymark.printer``) are
    used as they are; anything else is nested under ``prettymark.``.

    Example:
        >>> get_logger("mymodule").name
        'prettymark.mymodule'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
