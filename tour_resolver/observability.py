"""Logging setup for the tour resolver.

Modules log through `logging.getLogger(__name__)` and pass contextual
fields with `extra=`. `configure_logging` attaches one handler to the
package logger. It prints either the configured text format or, when
`structured` is set, one JSON object per record rendered by structlog,
with the `extra=` fields as top-level keys.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from .config import ObservabilityConfig, get_config

PACKAGE_LOGGER = "tour_resolver"


def json_formatter() -> logging.Formatter:
    """Formatter rendering stdlib records as JSON through structlog."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
    )


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the package logger from the observability settings.

    Calling it again replaces the previously installed handler.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if getattr(handler, "_tour_resolver", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        json_formatter() if config.structured else logging.Formatter(config.format)
    )
    handler._tour_resolver = True  # type: ignore[attr-defined]

    package_logger.addHandler(handler)
    package_logger.setLevel(config.level.upper())
    package_logger.propagate = False
    return package_logger
