# todoapp/logging_setup.py
import logging
import sys

from todoapp.middleware.correlation import correlation_id_var

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the correlation id of the request being served"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once; a no-op if the root logger already has handlers."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler.addFilter(CorrelationIdFilter())

    logging.basicConfig(level=getattr(logging, level, logging.INFO), handlers=[handler])
