#!/usr/bin/env python3
# morton_geohash/logging_conf.py
"""
Central logging setup for morton_geohash.
Supports console and optional rotating file logs. The library itself only
emits through module loggers; applications call setup_logging() once.
"""

import logging
from logging.handlers import RotatingFileHandler
from morton_geohash.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(cfg: Config) -> None:
    level_name = cfg["logging"].get("level", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("morton_geohash").setLevel(level)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)
