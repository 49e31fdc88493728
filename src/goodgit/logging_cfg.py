from __future__ import annotations

import logging
import os
from typing import Optional


def _drop_root_handlers() -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        if isinstance(h, logging.FileHandler):
            h.close()


def setup_logging() -> None:
    # 0 = silent (default), 1 = INFO, 2 = DEBUG
    level_map = {"0": logging.CRITICAL, "1": logging.INFO, "2": logging.DEBUG}
    lvl = level_map.get(os.getenv("LOG_LEVEL", "0").strip(), logging.CRITICAL)

    log_file: Optional[str] = os.getenv("LOG_FILE")
    # Drop handlers from a previous call so repeated setup does not duplicate lines
    _drop_root_handlers()

    if log_file:
        logging.basicConfig(
            level=lvl,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            handlers=[logging.FileHandler(log_file, encoding="utf-8")],
        )
    else:
        # No stderr handler either; stdout carries the NDJSON records
        logging.getLogger().setLevel(lvl)


def close_logging() -> None:
    """Detach and close the file handler installed by setup_logging()."""
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
            h.close()
