"""Central logging configuration for the library."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "DOCX2MD_LOG_LEVEL"
_DEFAULT_LEVEL = "INFO"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configured_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, _DEFAULT_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module logger, configuring the root handler on first use.

    The level is read from ``DOCX2MD_LOG_LEVEL``; applications that install
    their own handlers before importing the library keep their setup.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_configured_level(), format=_FORMAT)
    return logger
