import logging
from typing import Optional

from versecast.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

logger = logging.getLogger("versecast")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root handlers once; later calls only adjust the level."""
    level = (level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
