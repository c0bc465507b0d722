import logging
from contextvars import ContextVar

from config import LOG_LEVEL

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


class CorrelationIdFilter(logging.Filter):
    """
    Inject correlation_id into log records from contextvars
    """
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


def setup_logging(level: str = LOG_LEVEL):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    # Replace handlers so repeated setup (reloads, tests) doesn't duplicate output
    root.handlers = [handler]
