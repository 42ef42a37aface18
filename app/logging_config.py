# WorkHours - Logging Setup

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the web app and CLI scripts.

    Modules log through logging.getLogger(__name__).
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
