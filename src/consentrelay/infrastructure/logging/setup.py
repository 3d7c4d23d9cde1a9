from __future__ import annotations

import logging
import sys

from loguru import logger

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure both logging stacks used by the relay.

    Adapters log through the standard library; the pipeline logs through loguru.
    """
    level = (level or "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    logger.remove()
    logger.add(sys.stderr, level=level)

    # aiokafka is chatty at INFO about group coordination.
    if level != "DEBUG":
        logging.getLogger("aiokafka").setLevel(logging.WARNING)
