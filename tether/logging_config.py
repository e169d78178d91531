"""Logging infrastructure: structlog rendering for both structlog and stdlib loggers

Library modules log through ``logging.getLogger(__name__)``; entry points use
``get_logger``. Both end up in one root handler whose formatter runs the
structlog processor chain, so every line carries the same service context.
"""

import sys
import logging
from typing import Any, List
import structlog
from structlog.types import EventDict, Processor

from tether import __version__
from tether.config import settings

HANDLER_NAME = "tether"


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every entry with the service, its version and the environment"""
    event_dict.setdefault("service", "tether")
    event_dict.setdefault("version", __version__)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer() -> Processor:
    if settings.logging.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handler() -> logging.Handler:
    """Handler for LOG_OUTPUT: stdout or a log file path"""
    if settings.logging.output == "stdout":
        return logging.StreamHandler(sys.stdout)
    return logging.FileHandler(settings.logging.output, encoding="utf-8")


def setup_logging() -> None:
    """
    Configure structlog and the root logger.

    Safe to call repeatedly: the tether root handler is created once and
    handlers installed by the host (uvicorn, pytest) are left in place.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.logging.level.upper(), logging.INFO))

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = _build_handler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            # stdlib records: pick up `extra=` fields (request ids, timings)
            foreign_pre_chain=_shared_processors() + [structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _renderer(),
            ],
        ))
        root.addHandler(handler)

    structlog.configure(
        processors=_shared_processors() + [
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the given name (typically __name__)"""
    return structlog.get_logger(name)
