# authstash/app/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the app.

    logging.basicConfig is a no-op when handlers already exist (pytest,
    uvicorn), so only the level is forced in that case.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("authstash").setLevel(level)
