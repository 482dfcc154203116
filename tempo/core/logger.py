"""
Application logger.

Every module gets a named child of the ``tempo`` logger so that a single
handler on the root of the hierarchy controls output.
"""

import logging
import sys

from tempo.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logger(name: str = "tempo") -> logging.Logger:
    """
    Get a configured logger.

    The stream handler is attached once, to the top-level ``tempo`` logger;
    repeated calls are cheap and never duplicate output.

    Args:
        name: Logger name, usually ``__name__`` of the calling module

    Returns:
        logging.Logger: Logger for the given name
    """
    root = logging.getLogger("tempo")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_settings().LOG_LEVEL.upper())
        root.propagate = False

    if name == "tempo" or name.startswith("tempo."):
        return logging.getLogger(name)
    return root.getChild(name)


logger = setup_logger()
