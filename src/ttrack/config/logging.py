"""Logging setup for tt.

Modules log through ``logging.getLogger(__name__)`` or structlog; both end up
in one stderr handler rendered by structlog. On a terminal that is a colored
key/value line, with ``--log-json`` one JSON object per line.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "ttrack"


def _processors(log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        # ConsoleRenderer prints tracebacks itself.
        processors.append(structlog.processors.format_exc_info)
    return processors


def _stderr_handler(log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_processors(log_json),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all log output to stderr.

    ``ttrack.*`` loggers emit DEBUG records with *verbose* and WARNING and
    above otherwise. Other libraries stay at WARNING. Calling this again
    replaces the handler instead of adding a second one.
    """
    structlog.configure(
        processors=[
            *_processors(log_json),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers[:] = [_stderr_handler(log_json)]
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
