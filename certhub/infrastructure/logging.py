"""
structlog setup for certhub.

Every record is rendered as one JSON object carrying the service name and,
while a request is being handled, its correlation id.
"""

import logging
import sys
import time
from contextvars import ContextVar

import structlog

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def configure_logging(service_name: str, debug: bool = False) -> None:
    """
    Route structlog through stdlib logging on stdout.

    Args:
        service_name: Value of the ``service`` field on every record
        debug: Emit DEBUG records and SQLAlchemy engine logs
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            _add_correlation_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def add_service_name(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service_name


def _add_correlation_id(logger, method_name, event_dict):
    cid = correlation_id.get()
    if cid:
        event_dict.setdefault("correlation_id", cid)
    return event_dict


def set_correlation_id(cid: str) -> None:
    correlation_id.set(cid)


class Timer:
    """
    Wall-clock duration of a block, in milliseconds.

        with Timer() as t:
            await db.ping()
        logger.info("Database reachable", latency_ms=t.duration_ms)
    """

    def __init__(self) -> None:
        self._started = 0.0
        self.duration_ms = 0.0

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        self.duration_ms = round((time.perf_counter() - self._started) * 1000, 2)
