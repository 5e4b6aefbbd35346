"""Logging configuration shared by the API process and the scripts."""

from __future__ import annotations

import logging
import sys

from config import Settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install a single stderr handler on the root logger at `settings.log_level`."""

    level = getattr(logging, settings.log_level, logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        if getattr(h, "_orderkeep", False):
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._orderkeep = True  # type: ignore[attr-defined]
    root.addHandler(handler)
