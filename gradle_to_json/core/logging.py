"""Logging for the gradle-to-json CLI and library.

Parser and driver modules log through ``structlog.get_logger("gradle_to_json.*")``
with dotted event names (``driver.pass_complete``, ``variables.unresolved``).
:func:`setup_logging` routes those events, and any stdlib records, to stderr
so that stdout carries nothing but the JSON result.
"""

from __future__ import annotations

import logging
import logging.config

import structlog

from gradle_to_json.config import ParserSettings

PACKAGE_LOGGER = "gradle_to_json"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog on top of a stderr ``StreamHandler``.

    Arguments left as ``None`` come from ``GRADLE_TO_JSON_LOG_LEVEL`` and
    ``GRADLE_TO_JSON_LOG_FORMAT``. The CLI passes ``level="DEBUG"`` for
    ``--verbose``; library users may call this once or configure logging
    themselves. Safe to call repeatedly.
    """
    settings = ParserSettings.from_env()
    log_level = (level or settings.log_level).upper()
    log_format = (fmt or settings.log_format).lower()

    structlog.configure(
        processors=_SHARED_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "gradle_to_json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": _SHARED_PROCESSORS,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "gradle_to_json",
                },
            },
            "root": {"handlers": ["stderr"], "level": log_level},
            "loggers": {PACKAGE_LOGGER: {"level": log_level}},
        }
    )
