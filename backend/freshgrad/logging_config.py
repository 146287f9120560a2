from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Root logger setup for the API process. Safe to call more than once."""
    level_name = (level or os.getenv("LOG_LEVEL", "info")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("freshgrad").setLevel(getattr(logging, level_name, logging.INFO))
