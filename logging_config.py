"""Logging setup using structlog on top of stdlib logging.

Logs go to stderr so they never interleave with the report on stdout.

Environment Variables:
  FDMONITOR_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL (default INFO)
"""
import logging
import os
import sys

import structlog

DEFAULT_LEVEL = os.getenv("FDMONITOR_LOG_LEVEL", "INFO").upper()


def _level(name):
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name}")
    return level


def configure_logging(level=None):
    level = _level(level or DEFAULT_LEVEL)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%dT%H:%M:%S"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name):
    return structlog.get_logger(name)
