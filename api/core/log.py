"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with short `key=value`
messages; this only decides where records go and at which level.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "facts-api"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.log_level()).upper())

    # Uvicorn reloads call the lifespan again; keep a single handler.
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return None

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
