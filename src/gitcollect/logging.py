"""structlog setup for the gitcollect command line.

Command output goes to stdout, so every log line is written to stderr. The
console renderer is meant for people watching a terminal and leaves out
timestamps; the JSON renderer is meant for log collectors and keeps them.
At DEBUG, events also carry the function and line that emitted them.
"""

import logging
import sys
from typing import Any

import structlog

_CALLSITE = structlog.processors.CallsiteParameterAdder(
    [
        structlog.processors.CallsiteParameter.FUNC_NAME,
        structlog.processors.CallsiteParameter.LINENO,
    ]
)


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog for gitcollect.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_format: "json" for JSON lines, "console" for human-readable output
    """
    numeric_level = logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if numeric_level <= logging.DEBUG:
        processors.append(_CALLSITE)

    if log_format == "json":
        processors.extend([
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
