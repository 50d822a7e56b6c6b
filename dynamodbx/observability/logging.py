from __future__ import annotations

import logging
import sys

import structlog

from ..settings import settings


_CONFIGURED = False


def configure_logging(*, level: str | int | None = None) -> None:
    """
    Configure stdlib logging + structlog to output structured JSON to stdout.

    Applications embedding dynamodbx usually own logging themselves; call this
    from scripts and tests that want the library's events rendered as JSON.
    ``level`` defaults to the ``LOG_LEVEL`` setting.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    pre_chain = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    lvl = settings.log_level if level is None else level
    root.setLevel(lvl.strip().upper() if isinstance(lvl, str) else lvl)

    # botocore is chatty at DEBUG; keep it at WARNING unless asked for explicitly.
    logging.getLogger("botocore").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str | None = None):
    return structlog.get_logger(name)
