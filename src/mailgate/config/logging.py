"""structlog setup for the ``mailgate`` logger tree.

Only loggers under ``mailgate`` are touched; the host application's root
logger keeps whatever handlers it already has. Records go to stderr as
colored console lines, or as JSON lines with ``--log-json``.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "mailgate"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> logging.Logger:
    """Route ``mailgate.*`` records (stdlib and structlog) to stderr.

    Args:
        verbose: DEBUG for the mailgate tree; WARNING otherwise.
        log_json: JSON lines instead of console lines.

    Returns the configured ``mailgate`` logger. Calling again replaces
    its handler rather than adding a second one.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    mailgate_logger = logging.getLogger(LOGGER_NAME)
    mailgate_logger.handlers.clear()
    mailgate_logger.addHandler(handler)
    mailgate_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    mailgate_logger.propagate = False
    return mailgate_logger
