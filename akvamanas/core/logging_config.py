import logging

from akvamanas.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger once for the whole service.

    Modules obtain their own logger with `logging.getLogger(__name__)`;
    this only sets the level and format from `LOG_LEVEL`.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
