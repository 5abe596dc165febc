import logging

from agrogestion.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

logger = logging.getLogger("agrogestion")
