"""Structured logging configuration using structlog.

JSON lines in production, colored console output everywhere else. Both
pipelines run the same processors, so records coming from third-party
libraries through stdlib logging get the same context and redaction.

The Gemini API key travels as a ``key=`` query parameter; any string value
in a log record that looks like such a URL is scrubbed before rendering.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from casting_director import __version__

API_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s\"']+")
REDACTED = "***"

# Libraries whose INFO output is either noisy or carries request URLs
QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def redact_api_key(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace the value of ``key=`` query parameters in string fields."""
    for field, value in event_dict.items():
        if isinstance(value, str) and "key=" in value:
            event_dict[field] = API_KEY_PATTERN.sub(rf"\g<1>{REDACTED}", value)
    return event_dict


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["app"] = "casting-director"
    event_dict["version"] = __version__
    return event_dict


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "production" selects the JSON renderer
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
    # Last, so it also sees rendered tracebacks
    shared_processors.append(redact_api_key)

    renderer: Processor
    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    handler.setLevel(log_level_int)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, log_level_int))

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
