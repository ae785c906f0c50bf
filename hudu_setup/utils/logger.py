import logging
import os
import sys
from typing import Optional

import structlog

DEFAULT_LEVEL = "WARNING"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("HUDU_SETUP_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    return logging.getLevelNamesMapping().get(name, logging.WARNING)


def configure_logging(level: Optional[str] = None, json_output: bool = False) -> None:
    """
    Configure structlog for the wizard.

    Logs go to stderr so they never mix with prompts or the dry-run preview.
    Only key names and paths are logged, never values.
    """
    if json_output:
        exception_processor = structlog.processors.dict_tracebacks
        renderer = [structlog.processors.JSONRenderer()]
    else:
        exception_processor = structlog.processors.format_exc_info
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            exception_processor,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            *renderer,
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        cache_logger_on_first_use=False,
    )


def json_logs_requested() -> bool:
    return os.getenv("HUDU_SETUP_LOG_FORMAT", "").lower() == "json"


configure_logging(json_output=json_logs_requested())

logger: structlog.stdlib.BoundLogger = structlog.get_logger()
