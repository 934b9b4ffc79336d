"""Logging setup module that configures the default log format."""

import logging
from typing import Optional

from .config import LOG_LEVEL


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
