"""structlog setup for passreset.

Events go through the stdlib logging machinery, rendered as one JSON object per
line when ``LOG_JSON`` is set and with the colored console renderer otherwise.
Nothing is configured on import; applications call `configure_logging` once.
"""

import logging

import structlog

from passreset.core.config.settings import settings


def configure_logging(log_level: str = None, json_logs: bool = None) -> None:
    """
    Install the passreset structlog configuration.

    Both arguments fall back to ``settings.LOG_LEVEL`` and ``settings.LOG_JSON``.
    Events are rendered as JSON when ``json_logs`` is true and with the
    structlog console renderer otherwise.
    """
    level = (log_level or settings.LOG_LEVEL).upper()
    render_json = settings.LOG_JSON if json_logs is None else json_logs

    logging.basicConfig(format="%(message)s", level=level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer() if render_json else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
