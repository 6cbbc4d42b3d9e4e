"""
structlog setup for the EchoVibe service.

Every event carries the service name and deployment environment so the
mailer and retry logs can be told apart from other services in a shared
sink. Output is JSON lines, or the coloured console renderer when
debugging locally.
"""

import logging
import sys
from typing import Any, Iterable

import structlog
from structlog.types import EventDict, Processor

SERVICE_NAME = "echovibe-api"

# Client libraries that log every HTTP request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore", "urllib3", "botocore", "google_genai")


def resolve_level(name: str) -> int:
    """Map a level name to its logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName((name or "").upper())
    return level if isinstance(level, int) else logging.INFO


def service_context(environment: str) -> Processor:
    """Build a processor stamping `service` and `environment` on each event."""

    def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_service_context


def quiet_chatty_loggers(names: Iterable[str] = CHATTY_LOGGERS, floor: int = logging.WARNING) -> None:
    for name in names:
        logging.getLogger(name).setLevel(floor)


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        log_level: Level name from settings (DEBUG, INFO, ...)
        environment: Deployment name added to every event
    """
    level = resolve_level(log_level)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    if level > logging.DEBUG:
        quiet_chatty_loggers()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        service_context(environment),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if level == logging.DEBUG:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__):
    return structlog.get_logger(name)


from .config import settings  # noqa: E402

configure_logging(settings.log_level, settings.environment)
