"""Logger factory for oauthcase.

All modules log through the ``oauthcase`` logger hierarchy. Nothing here
installs handlers; applications decide where records go.
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "oauthcase"


def get_logger(area: str) -> logging.Logger:
    """Get the named child logger, e.g. get_logger("signer") -> oauthcase.signer."""
    return logging.getLogger(f"{ROOT_LOGGER}.{area}")


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Set the level of the oauthcase logger hierarchy.

    Args:
        level: Explicit level. Defaults to LoggingSettings.level.
    """
    if level is None:
        from oauthcase.foundation.config import get_settings
        level = get_settings().logging.level
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    return root
