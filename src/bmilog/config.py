"""
Runtime configuration.

Settings come from the environment, falling back to the defaults below.

Environment
-----------
BMILOG_STORE_PATH          : JSON file holding the key-value store (default "~/.bmilog/storage.json")
BMILOG_HISTORY_KEY         : key the history array is stored under (default "bmiHistory")
BMILOG_UPDATE_URL          : build manifest probed for a newer release (default "", disabled)
BMILOG_UPDATE_PERIOD       : seconds between update probes (default 3600)
BMILOG_DISPLAY_DATE_FORMAT : strftime format for a record's display date
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

LOGGER = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default


STORE_PATH = os.getenv("BMILOG_STORE_PATH", os.path.join("~", ".bmilog", "storage.json"))
HISTORY_KEY = os.getenv("BMILOG_HISTORY_KEY", "bmiHistory")
UPDATE_URL = os.getenv("BMILOG_UPDATE_URL", "")
UPDATE_PERIOD = _float_env("BMILOG_UPDATE_PERIOD", 3600.0)
DISPLAY_DATE_FORMAT = os.getenv("BMILOG_DISPLAY_DATE_FORMAT", "%d %b %Y, %H:%M")

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False, log_file_path: Optional[str] = None) -> None:
    """
    - verbose: also emit debug logs to stderr
    - log_file_path: append timestamped logs to this file
    Without either, logging is left unconfigured (warnings still reach stderr).
    """
    handlers: List[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            handlers=handlers,
            force=True,
        )
